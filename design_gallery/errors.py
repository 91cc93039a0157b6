# design_gallery/errors.py
from __future__ import annotations


class ApiError(Exception):
    """Error surfaced to API clients as {"error": message} with an HTTP status."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None, **extra):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_dict(self) -> dict:
        return {"error": self.message, **self.extra}


class ValidationError(ApiError):
    status_code = 400


class UploadError(ApiError):
    status_code = 502
