from fastapi import HTTPException, status
from typing import Optional, Dict, Any

class BaseAPIException(HTTPException):
    """Base exception for API errors"""
    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error": {
                    "code": error_code,
                    "message": message,
                    "details": self.details
                }
            }
        )

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message

class ProviderNotFoundError(BaseAPIException):
    """Unknown strategy name"""
    def __init__(self, provider: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="OAUTH_404",
            message=f"Unsupported OAuth provider: {provider}",
            details={"provider": provider}
        )

class InternalServerError(BaseAPIException):
    """Internal server errors"""
    def __init__(self, message: str = "Internal server error", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="INTERNAL_001",
            message=message,
            details=details
        )


class TransportError(Exception):
    """Raised by the HTTP collaborator when no usable response came back."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
