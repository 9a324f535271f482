"""Tests for notifications."""

from datetime import datetime

import pytest

from farmledger.domain.errors import NotFoundError, ValidationError


def test_notify_and_list_newest_first(notification_service):
    older = notification_service.notify("Harvest due", timestamp=datetime(2024, 7, 1, 8, 0))
    newer = notification_service.notify("Fence fixed", link="todos", timestamp=datetime(2024, 7, 2, 8, 0))

    items = notification_service.list_notifications()

    assert [item.id for item in items] == [newer, older]
    assert items[0].link == "todos"
    assert items[0].read is False
    assert items[0].seen is False


def test_read_and_seen_are_independent(notification_service):
    first = notification_service.notify("One", timestamp=datetime(2024, 7, 1))
    notification_service.notify("Two", timestamp=datetime(2024, 7, 2))

    assert notification_service.mark_all_seen() == 2
    assert notification_service.unseen_count() == 0
    assert notification_service.unread_count() == 2

    notification_service.mark_read(first)

    assert notification_service.unread_count() == 1
    assert [item.message for item in notification_service.list_notifications(unread_only=True)] == ["Two"]
    assert notification_service.mark_all_read() == 1
    assert notification_service.unread_count() == 0


def test_notify_rejects_blank_message(notification_service):
    with pytest.raises(ValidationError):
        notification_service.notify(" ")


def test_delete_notification(notification_service):
    notification_id = notification_service.notify("Rain expected")

    notification_service.delete_notification(notification_id)

    assert notification_service.list_notifications() == []
    with pytest.raises(NotFoundError):
        notification_service.mark_read(notification_id)
