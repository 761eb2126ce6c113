"""
Prometheus metrics
"""
import time

from fastapi import FastAPI
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi.responses import Response

# HTTP запросы
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

# Время обработки запросов
http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Обращения к кэшу пользователей
user_cache_requests_total = Counter(
    'user_cache_requests_total',
    'User cache lookups',
    ['cache', 'result']  # 'hit' или 'miss'
)

# Инвалидации кэша пользователей
user_cache_evictions_total = Counter(
    'user_cache_evictions_total',
    'User cache invalidations',
    ['reason']  # 'write' или 'clear_all'
)


def setup_metrics(app: FastAPI):
    """Настройка метрик для FastAPI приложения"""

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Endpoint для Prometheus метрик"""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    # Middleware для автоматического сбора метрик
    @app.middleware("http")
    async def metrics_middleware(request, call_next):
        """Middleware для сбора метрик HTTP запросов"""
        method = request.method
        path = request.url.path

        # Игнорирование health check и metrics
        if path in ["/health", "/metrics", "/favicon.ico"]:
            return await call_next(request)

        start_time = time.time()
        response = await call_next(request)
        duration = time.time() - start_time

        http_requests_total.labels(
            method=method,
            endpoint=path,
            status_code=response.status_code
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            endpoint=path
        ).observe(duration)

        return response


def track_cache_hit(cache_name: str):
    """Отслеживание попадания в кэш"""
    user_cache_requests_total.labels(cache=cache_name, result='hit').inc()


def track_cache_miss(cache_name: str):
    """Отслеживание промаха кэша"""
    user_cache_requests_total.labels(cache=cache_name, result='miss').inc()


def track_cache_eviction(reason: str):
    """Отслеживание инвалидации кэша"""
    user_cache_evictions_total.labels(reason=reason).inc()
