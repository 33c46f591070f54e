from .oauth import (
    AuthResult,
    AuthVerificationRecord,
    CallbackError,
    CallbackResult,
    CallbackState,
    Credentials,
    ErrorKind,
    Extra,
    Info,
    ProviderError,
    ProviderResponse,
    Token,
    UserProfile,
)

__all__ = [
    "AuthResult",
    "AuthVerificationRecord",
    "CallbackError",
    "CallbackResult",
    "CallbackState",
    "Credentials",
    "ErrorKind",
    "Extra",
    "Info",
    "ProviderError",
    "ProviderResponse",
    "Token",
    "UserProfile",
]
