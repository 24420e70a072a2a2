"""
FastAPI dependencies wiring settings into the signup services.

Routes receive fully constructed services; tests replace them through
app.dependency_overrides.
"""

from fastapi import Depends

from app.config import Settings, get_settings
from app.services.notification_dispatcher import DispatcherConfig, NotificationDispatcher
from app.services.signup_flow import SignupFlow
from app.services.submission_resolver import ResolverConfig, SubmissionResolver


def get_submission_resolver(settings: Settings = Depends(get_settings)) -> SubmissionResolver:
    return SubmissionResolver(ResolverConfig.from_settings(settings))


def get_notification_dispatcher(
    settings: Settings = Depends(get_settings),
) -> NotificationDispatcher:
    return NotificationDispatcher(DispatcherConfig.from_settings(settings))


def get_signup_flow(
    resolver: SubmissionResolver = Depends(get_submission_resolver),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> SignupFlow:
    return SignupFlow(resolver, dispatcher)
