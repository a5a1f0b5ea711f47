"""
Save API Schemas - Response models for /save-menu and credential checks

Error bodies are {"error": "..."}, not FastAPI's {"detail": ...}; the admin
editor reads the "error" key.
"""

from pydantic import BaseModel, Field


class SaveMenuResponse(BaseModel):
    """Successful save"""

    ok: bool = Field(default=True, description="Always true on success")


class ErrorResponse(BaseModel):
    """Error body returned by the menu endpoints"""

    error: str = Field(..., description="Human-readable error message")


class AuthVerifyResponse(BaseModel):
    """Result of a credential check"""

    ok: bool = Field(default=True)
    user: str = Field(..., description="Authenticated admin user")
