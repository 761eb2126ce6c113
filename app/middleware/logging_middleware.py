"""
Logging middleware
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware для логирования всех запросов"""

    async def dispatch(self, request: Request, call_next):
        """Обработка запроса"""
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        extra = {"request_id": request_id}

        # Логирование входящего запроса
        logger.info(f"Incoming request: {request.method} {request.url.path}", extra=extra)

        # Выполнение запроса
        response = await call_next(request)

        # Вычисление времени обработки
        process_time = (time.time() - start_time) * 1000

        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        # Логирование ответа
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"- Status: {response.status_code} - Time: {process_time:.2f}ms",
            extra=extra,
        )

        return response
