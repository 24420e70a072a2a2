"""
waitlist.py
-----------
Purpose:
    API endpoints called by the signup wizard.

Architecture:
    - API layer: Parses payloads, maps outcomes to HTTP status codes
    - Service layer: SubmissionResolver, NotificationDispatcher, SignupFlow
      (constructed per request from settings, see app.dependencies)

Usage:
    1. POST /api/google-sheets - Persist a signup, returns referral code + position
    2. POST /api/send-welcome-email - Send the welcome email for a resolved signup
    3. POST /api/waitlist - Both of the above in one call
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_notification_dispatcher, get_signup_flow, get_submission_resolver
from app.infrastructure.observability.logging import get_logger
from app.models.api.waitlist_response import WelcomeEmailResponse
from app.models.domain.signup_domain import (
    EmailDispatchRequest,
    OutcomeKind,
    SignupPayload,
    SubmissionResult,
)
from app.services.notification_dispatcher import NotificationDispatcher, NotificationError
from app.services.signup_flow import SignupFlow
from app.services.submission_resolver import SubmissionResolver

router = APIRouter(prefix="/api", tags=["waitlist"])
logger = get_logger(__name__)


def submission_status_code(result: SubmissionResult) -> int:
    """
    Map a SubmissionResult to an HTTP status.

    Successful (including masked) results and backend-reported failures
    are 200, user-correctable rejections 400, strict-mode outages 503.
    """
    if result.success or result.outcome == OutcomeKind.FAILED:
        return status.HTTP_200_OK
    if result.outcome == OutcomeKind.REJECTED:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_503_SERVICE_UNAVAILABLE


def _submission_response(result: SubmissionResult) -> JSONResponse:
    return JSONResponse(
        content=result.model_dump(by_alias=True, exclude_none=True),
        status_code=submission_status_code(result),
    )


@router.post("/google-sheets")
async def submit_signup(
    payload: SignupPayload,
    resolver: SubmissionResolver = Depends(get_submission_resolver),
):
    """
    Persist a waitlist signup through the configured upstream.

    Returns:
        SubmissionResult: success, referralCode, waitlistPosition (+ diagnostics)

    Raises:
        400: Validation failure reported by the backend upstream
        503: Upstream unavailable in strict mode
    """
    result = await resolver.resolve(payload)
    return _submission_response(result)


@router.post("/waitlist")
async def join_waitlist(
    payload: SignupPayload,
    flow: SignupFlow = Depends(get_signup_flow),
):
    """Persist a signup and send the welcome email. Email failures are not reported."""
    result = await flow.submit(payload)
    return _submission_response(result)


@router.post("/send-welcome-email", response_model=WelcomeEmailResponse, response_model_exclude_none=True)
async def send_welcome_email(
    request: EmailDispatchRequest,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """
    Send the welcome email for an already resolved signup.

    Raises:
        500: Email provider not configured or unreachable
    """
    try:
        receipt = await dispatcher.dispatch(request)
    except NotificationError as e:
        logger.error("Welcome email request failed", email=request.email, error=str(e))
        return JSONResponse(
            content=WelcomeEmailResponse(success=False, error=str(e)).model_dump(
                by_alias=True, exclude_none=True
            ),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return WelcomeEmailResponse(success=True, email_id=receipt.email_id)
