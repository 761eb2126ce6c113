"""
Application exceptions

Each error carries the HTTP status it is rendered with; handlers in
app.main turn them into a ``{"success": false, "message": ...}`` body.
"""
from typing import Optional


class GeoViewError(Exception):
    """Базовое исключение приложения."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(GeoViewError):
    """Некорректный запрос (валидация, дубликат избранного)."""

    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(GeoViewError):
    """Неверные учётные данные или отсутствующий/невалидный токен."""

    status_code = 401
    default_message = "Not authenticated"


class NotFoundError(GeoViewError):
    """Пользователь или объект не найден."""

    status_code = 404
    default_message = "Not found"


class ConflictError(GeoViewError):
    """Имя пользователя или email уже заняты."""

    status_code = 409
    default_message = "Resource already exists"


class InternalError(GeoViewError):
    """Ошибка хранилища или кэша."""

    status_code = 500


class CacheUnavailableError(InternalError):
    """Redis недоступен (используется admin endpoint'ами)."""

    status_code = 503
    default_message = "Cache is unavailable"
