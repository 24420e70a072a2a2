"""
Composed signup flow: resolve the submission, then send the welcome email.

The two steps run sequentially. The email is only attempted for a successful,
new signup, and its failure never changes the returned SubmissionResult.
"""

from app.infrastructure.observability.logging import get_logger
from app.models.domain.signup_domain import (
    EmailDispatchRequest,
    OutcomeKind,
    SignupPayload,
    SubmissionResult,
)
from app.services.notification_dispatcher import NotificationDispatcher, NotificationError
from app.services.submission_resolver import SubmissionResolver

logger = get_logger(__name__)


class SignupFlow:
    def __init__(self, resolver: SubmissionResolver, dispatcher: NotificationDispatcher):
        self.resolver = resolver
        self.dispatcher = dispatcher

    async def submit(self, payload: SignupPayload) -> SubmissionResult:
        result = await self.resolver.resolve(payload)

        if not result.success:
            return result

        if result.outcome == OutcomeKind.ALREADY_REGISTERED:
            logger.info("Skipping welcome email for existing signup", email=payload.email)
            return result

        await self._notify(EmailDispatchRequest.from_result(payload, result))
        return result

    async def _notify(self, request: EmailDispatchRequest) -> None:
        try:
            await self.dispatcher.dispatch(request)
        except NotificationError as e:
            logger.warning(
                "Welcome email failed, signup unaffected",
                email=request.email,
                error=str(e),
                error_type=type(e).__name__,
            )
        except Exception as e:
            logger.warning(
                "Welcome email raised unexpectedly, signup unaffected",
                email=request.email,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
