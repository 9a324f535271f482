"""Notification domain service."""

import logging
from datetime import datetime, UTC
from typing import Optional

from farmledger.database.base import Database
from farmledger.domain.entities import Notification
from farmledger.domain.errors import NotFoundError, notification_not_found
from farmledger.domain.validation import optional_text, require_text

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for the notification panel.

    A notification is "seen" once it has been shown in the panel and
    "read" once the user acknowledges it. The two flags are independent.
    """

    def __init__(self, db: Database):
        self.db = db

    def notify(
        self,
        message: str,
        link: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> int:
        """Create an unread, unseen notification."""
        notification_id = self.db.create_notification(
            message=require_text(message, "Message"),
            timestamp=timestamp or datetime.now(UTC),
            link=optional_text(link),
        )
        logger.debug("Created notification %s", notification_id)
        return notification_id

    def list_notifications(self, unread_only: bool = False) -> list[Notification]:
        """List notifications, newest first."""
        notifications = self.db.list_notifications()
        if unread_only:
            return [item for item in notifications if not item.read]
        return notifications

    def _require(self, notification_id: int) -> Notification:
        notification = self.db.get_notification(notification_id)
        if notification is None:
            raise NotFoundError(notification_not_found(notification_id))
        return notification

    def mark_read(self, notification_id: int) -> None:
        self._require(notification_id)
        self.db.update_notification_flags(notification_id, read=True)

    def mark_all_read(self) -> int:
        """Mark every unread notification as read. Returns how many changed."""
        unread = [item for item in self.db.list_notifications() if not item.read]
        for item in unread:
            self.db.update_notification_flags(item.id, read=True)
        return len(unread)

    def mark_all_seen(self) -> int:
        """Mark every notification as seen, e.g. after the panel is shown."""
        unseen = [item for item in self.db.list_notifications() if not item.seen]
        for item in unseen:
            self.db.update_notification_flags(item.id, seen=True)
        return len(unseen)

    def unread_count(self) -> int:
        return sum(1 for item in self.db.list_notifications() if not item.read)

    def unseen_count(self) -> int:
        return sum(1 for item in self.db.list_notifications() if not item.seen)

    def delete_notification(self, notification_id: int) -> None:
        self._require(notification_id)
        self.db.delete_notification(notification_id)
