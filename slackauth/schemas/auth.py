from pydantic import BaseModel
from typing import Optional
from enum import Enum

class ErrorCode(str, Enum):
    # Callback related
    CALLBACK_FAILED = "AUTH_001"

    # OAuth related
    OAUTH_PROVIDER_NOT_FOUND = "OAUTH_404"

class Error(BaseModel):
    code: ErrorCode
    message: str
    details: Optional[dict] = None

class BaseResponse(BaseModel):
    success: bool = True
    data: Optional[dict] = None
    error: Optional[Error] = None
    meta: Optional[dict] = None
