"""
Common schema definitions
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая схема: snake_case в Python, camelCase в JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(CamelModel):
    """Единый ответ вида {success, message}."""
    success: bool = True
    message: str


class ErrorResponse(MessageResponse):
    """Тело ответа при ошибке."""
    success: bool = False
