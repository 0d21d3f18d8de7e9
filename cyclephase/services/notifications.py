"""
Period reminder notifications.

Notifications are stored in the tracker table for the app to list; delivery
to the device is handled elsewhere.
"""
import os
from typing import List, Optional
from datetime import date

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from cyclephase.models.notification import Notification
from cyclephase.models.record import CycleRecord
from cyclephase.models.template import CycleTemplate
from cyclephase.services.constants import DEFAULT_REMINDER_DAYS, PERIOD_NOTIFICATION_MESSAGE
from cyclephase.services.cycle import get_reference_start
from cyclephase.services.engine import days_until_next_start
from cyclephase.utils.dynamo import get_dynamo, create_pk, create_notification_sk
from cyclephase.utils.logging import log_exception

logger = Logger()

def build_period_notification(user_id: str, days_until: int) -> Notification:
    """Create an unread period reminder."""
    return Notification(
        user_id=user_id,
        type="period",
        message=PERIOD_NOTIFICATION_MESSAGE.format(days=days_until)
    )

def get_reminder_lead_days() -> int:
    """
    Reminder lead time from PERIOD_REMINDER_DAYS, defaulting to 3 days.

    Raises:
        EnvironmentError: If PERIOD_REMINDER_DAYS is set but not an integer
    """
    configured = os.environ.get("PERIOD_REMINDER_DAYS")
    if not configured:
        return DEFAULT_REMINDER_DAYS
    try:
        return int(configured)
    except ValueError:
        raise EnvironmentError(
            f"PERIOD_REMINDER_DAYS must be a whole number of days, got '{configured}'"
        )

class NotificationRepository:
    """Store notifications for a user."""

    def __init__(self, dynamo=None):
        self.dynamo = dynamo or get_dynamo()

    def create_notification(self, notification: Notification) -> bool:
        """
        Store a notification.

        Returns:
            True if stored, False if the write failed (the failure is logged)
        """
        try:
            self.dynamo.put_item({
                "PK": create_pk(notification.user_id),
                "SK": create_notification_sk(notification.created_at),
                **notification.model_dump()
            })
            return True
        except ClientError as e:
            log_exception(logger, "Error creating notification", extra={
                "user_id": notification.user_id,
                "type": notification.type,
                "error": str(e)
            })
            return False

def create_period_reminder(
    user_id: str,
    records: List[CycleRecord],
    template: CycleTemplate,
    query_date: date,
    lead_days: Optional[int] = None,
    repository: Optional[NotificationRepository] = None
) -> Optional[Notification]:
    """
    Create a period reminder if the next cycle is close enough.

    Args:
        user_id: User identifier
        records: User's cycle records
        template: Cycle template
        query_date: Date the reminder is evaluated for
        lead_days: Remind when the next start is at most this many days away;
            defaults to PERIOD_REMINDER_DAYS
        repository: Notification store, created on demand

    Returns:
        The stored notification, or None if no reminder is due or storing failed

    Raises:
        NoCycleRecordsError: If records is empty
        InvalidTemplateError: If the template is invalid
        InvalidRangeError: If query_date is before the latest record's start
    """
    if lead_days is None:
        lead_days = get_reminder_lead_days()

    reference_start = get_reference_start(records)
    days_until = days_until_next_start(reference_start, template, query_date)

    if days_until > lead_days:
        logger.debug("No period reminder due", extra={
            "user_id": user_id,
            "days_until": days_until,
            "lead_days": lead_days
        })
        return None

    notification = build_period_notification(user_id, days_until)
    repository = repository or NotificationRepository()
    if not repository.create_notification(notification):
        return None

    logger.info("Period reminder created", extra={
        "user_id": user_id,
        "days_until": days_until
    })
    return notification
