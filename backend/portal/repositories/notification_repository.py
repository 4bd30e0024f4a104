"""Repository for in-app Notification CRUD operations."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from portal.core.sorting import apply_order_by
from portal.models.notification import Notification


class NotificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def _build(
        self,
        user_id: str,
        notification_type: str,
        title: str,
        message: str,
        request_id: UUID | None,
    ) -> Notification:
        return Notification(
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            request_id=request_id,
        )

    def create(
        self,
        *,
        user_id: str,
        notification_type: str,
        title: str,
        message: str,
        request_id: UUID | None = None,
    ) -> Notification:
        notification = self._build(user_id, notification_type, title, message, request_id)
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def create_many(
        self,
        *,
        user_ids: list[str],
        notification_type: str,
        title: str,
        message: str,
        request_id: UUID | None = None,
    ) -> list[Notification]:
        notifications = [
            self._build(user_id, notification_type, title, message, request_id)
            for user_id in user_ids
        ]
        self.db.add_all(notifications)
        self.db.commit()
        for notification in notifications:
            self.db.refresh(notification)
        return notifications

    def get_by_id(self, notification_id: UUID) -> Notification | None:
        return (
            self.db.query(Notification)
            .filter(Notification.id == notification_id)
            .first()
        )

    def get_all(
        self,
        user_id: str,
        skip: int = 0,
        limit: int = 50,
        notification_type: str | None = None,
        is_read: bool | None = None,
        order_by: str | None = None,
    ) -> list[Notification]:
        query = self.db.query(Notification).filter(Notification.user_id == user_id)
        if notification_type is not None:
            query = query.filter(Notification.notification_type == notification_type)
        if is_read is not None:
            query = query.filter(Notification.is_read == is_read)
        query = apply_order_by(query, Notification, order_by)
        return query.offset(skip).limit(limit).all()

    def count_unread(self, user_id: str) -> int:
        return (
            self.db.query(Notification)
            .filter(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
            .count()
        )

    def mark_as_read(self, notification_id: UUID) -> Notification | None:
        notification = self.get_by_id(notification_id)
        if notification is None:
            return None
        notification.is_read = True  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_as_read(self, user_id: str) -> int:
        count = (
            self.db.query(Notification)
            .filter(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
            .update({"is_read": True})
        )
        self.db.commit()
        return count
