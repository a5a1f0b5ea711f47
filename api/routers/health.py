"""
Health Router - Health checks and system status endpoints
"""

from fastapi import APIRouter, Depends
from typing import Dict, Any

from api.dependencies import get_app_state, AppState

router = APIRouter()


@router.get("/ready")
async def health_check_ready(state: AppState = Depends(get_app_state)) -> Dict[str, Any]:
    """
    Readiness probe.

    Returns ready=True once the menu repository is available.
    """
    return {
        "ready": state.is_ready(),
        "details": state.get_status()
    }
