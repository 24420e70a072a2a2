# app/models/api/waitlist_response.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WelcomeEmailResponse(BaseModel):
    """Response for POST /api/send-welcome-email"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    email_id: str | None = None
    error: str | None = None


class ReadinessResponse(BaseModel):
    """Response for GET /readyz"""

    overall_ok: bool
    checks: dict
    timestamp: float
