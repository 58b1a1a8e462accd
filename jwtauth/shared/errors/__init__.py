from .base import (
    AppError,
    ConfigMissingError,
    DomainError,
    HashingFailedError,
    InfrastructureError,
    StoreError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ConfigMissingError",
    "DomainError",
    "HashingFailedError",
    "InfrastructureError",
    "StoreError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
