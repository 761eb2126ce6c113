"""
Главное приложение FastAPI
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from app.config import settings
from app.api.health import router as health_router
from app.api.router import api_router
from app.database.connection import init_db, close_db
from app.exceptions import GeoViewError
from app.logging_config import setup_logging
from app.middleware.logging_middleware import LoggingMiddleware
from app.monitoring.metrics import setup_metrics


# Настройка логирования
setup_logging(level=settings.LOG_LEVEL, use_json=settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan события приложения"""
    # Запуск
    logger.info(f"Starting {settings.PROJECT_NAME}...")
    await init_db()
    logger.info("Database initialized")

    yield

    # Остановка
    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    await close_db()
    logger.info("Database connection closed")


# Создание приложения
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="REST API для регистрации, профиля и избранных стран пользователя",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan
)

# CORS Middleware (cookie сессии требует allow_credentials)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom Middleware
app.add_middleware(LoggingMiddleware)

# Настройка метрик
if settings.ENABLE_METRICS:
    setup_metrics(app)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Единое тело ошибки {success: false, message}"""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


# Обработка исключений
@app.exception_handler(GeoViewError)
async def app_exception_handler(request: Request, exc: GeoViewError):
    """Ошибки приложения со своим статусом"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Ошибки валидации тела/параметров запроса"""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg", ""))
    return error_response(400, "; ".join(messages) or "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTP ошибки фреймворка (404 маршрута, 405 и т.п.)"""
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик исключений"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(
        500,
        "Internal server error" if not settings.DEBUG else f"Server error: {exc}",
    )


# Health check и корневой endpoint
app.include_router(health_router, tags=["Health"])

# API Routes
app.include_router(api_router, prefix=settings.API_PREFIX)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8080,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else 4
    )
