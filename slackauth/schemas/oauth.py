from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderError(BaseModel):
    code: Optional[str] = None
    description: Optional[str] = None


class Token(BaseModel):
    """Result of the code exchange; `other_params` keeps every unmapped field."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: str = "Bearer"
    other_params: Dict[str, Any] = Field(default_factory=dict)
    provider_error: Optional[ProviderError] = None

    @property
    def scope(self) -> str:
        return self.other_params.get("scope") or ""

    @property
    def granted_scopes(self) -> List[str]:
        # "a,b" -> ["a", "b"]; an empty field grants nothing
        if not self.scope:
            return []
        return self.scope.split(",")


class ProviderResponse(BaseModel):
    status_code: int
    body: Dict[str, Any] = Field(default_factory=dict)


class AuthVerificationRecord(BaseModel):
    """Body of `auth.test`: who the token belongs to."""

    model_config = ConfigDict(extra="allow")

    ok: bool = False
    user: Optional[str] = None
    user_id: Optional[str] = None
    team: Optional[str] = None
    team_id: Optional[str] = None
    url: Optional[str] = None
    error: Optional[str] = None


class UserProfile(BaseModel):
    """The `user` object of `users.identity`. Avatar sizes arrive as extra `image_*` keys."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    image_48: Optional[str] = None
    profile: Dict[str, Any] = Field(default_factory=dict)

    def image_urls(self) -> Dict[str, Any]:
        fields = {**self.profile, **self.model_dump(exclude={"profile"}, exclude_unset=True)}
        return {key: value for key, value in fields.items() if key.startswith("image_")}


class UserIdentityResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    ok: bool = False
    user: Optional[UserProfile] = None
    error: Optional[str] = None


class ErrorKind(str, Enum):
    MISSING_CODE = "missing_code"
    UNAUTHORIZED = "unauthorized"
    PROVIDER_ERROR = "provider_error"
    TRANSPORT_ERROR = "transport_error"


class CallbackError(BaseModel):
    kind: ErrorKind
    message: str
    code: Optional[str] = None


class CallbackState(BaseModel):
    """Everything one callback accumulates. Never shared between callbacks."""

    provider: str
    token: Optional[Token] = None
    auth: Optional[AuthVerificationRecord] = None
    user: Optional[UserProfile] = None
    errors: List[CallbackError] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def set_errors(self, *errors: CallbackError) -> "CallbackState":
        self.errors.extend(errors)
        return self


class Credentials(BaseModel):
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: Optional[str] = None
    expires: bool = False
    scopes: List[str] = Field(default_factory=list)
    other: Dict[str, Any] = Field(default_factory=dict)


class Info(BaseModel):
    name: Optional[str] = None
    nickname: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    urls: Dict[str, Any] = Field(default_factory=dict)


class Extra(BaseModel):
    raw_info: Dict[str, Any] = Field(default_factory=dict)


class AuthResult(BaseModel):
    provider: str
    uid: Optional[Any] = None
    credentials: Credentials
    info: Optional[Info] = None
    extra: Extra


class CallbackResult(BaseModel):
    success: bool
    auth: Optional[AuthResult] = None
    errors: List[CallbackError] = Field(default_factory=list)
