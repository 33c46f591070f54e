from typing import Optional
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
import logging

from slackauth.services.auth_service import AuthService
from slackauth.schemas.auth import BaseResponse, Error, ErrorCode

from dependency_injector.wiring import inject, Provide
from slackauth.containers import Container

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


@router.get("/{provider}/authorize")
@inject
def oauth_authorize(
    request: Request,
    provider: str,
    scope: Optional[str] = None,
    state: Optional[str] = None,
    team: Optional[str] = None,
    auth_service: AuthService = Depends(Provide[Container.services.auth_service]),
):
    """Redirects the user agent to the provider's authorization page.

    Uses this API's callback URL as the provider redirect_uri.
    """
    callback_url = str(request.url_for("oauth_callback", provider=provider))
    auth_url = auth_service.get_oauth_auth_url(
        provider, callback_url, scope=scope, state=state, team=team
    )
    return RedirectResponse(url=auth_url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/{provider}/callback", name="oauth_callback", response_model=BaseResponse)
@inject
async def oauth_callback(
    request: Request,
    provider: str,
    auth_service: AuthService = Depends(Provide[Container.services.auth_service]),
):
    """Provider redirects here. Exchange code -> token -> normalized identity."""
    # Must match the redirect_uri sent on authorize
    callback_url = str(request.url_for("oauth_callback", provider=provider))
    result = await auth_service.process_oauth_callback(
        provider, dict(request.query_params), callback_url
    )

    if not result.success:
        body = BaseResponse(
            success=False,
            error=Error(
                code=ErrorCode.CALLBACK_FAILED,
                message=result.errors[0].message,
                details={"errors": [e.model_dump(mode="json") for e in result.errors]},
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json")
        )

    return BaseResponse(success=True, data=result.auth.model_dump(mode="json"))
