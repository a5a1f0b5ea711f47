"""
Auth Router - server-side admin credential check used by the editor's login
"""

from fastapi import APIRouter, Depends

from api.schemas.save import AuthVerifyResponse
from api.dependencies import require_admin

router = APIRouter()


@router.post("/verify", response_model=AuthVerifyResponse)
async def verify_credentials(user: str = Depends(require_admin)) -> AuthVerifyResponse:
    """Answers 200 for valid admin credentials, 401 otherwise."""
    return AuthVerifyResponse(ok=True, user=user)
