from uuid import UUID

from sqlalchemy.orm import Session

from portal.core.sorting import apply_order_by
from portal.models.announcement import Announcement, AnnouncementPosition
from portal.schemas.announcement import AnnouncementCreate


class AnnouncementRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, announcement_id: UUID) -> Announcement | None:
        return self.db.query(Announcement).filter(Announcement.id == announcement_id).first()

    def get_all(
        self, skip: int = 0, limit: int = 100, order_by: str | None = None
    ) -> list[Announcement]:
        query = apply_order_by(self.db.query(Announcement), Announcement, order_by)
        return query.offset(skip).limit(limit).all()

    def get_position_ids(self, announcement_id: UUID) -> list[UUID]:
        rows = (
            self.db.query(AnnouncementPosition.position_id)
            .filter(AnnouncementPosition.announcement_id == announcement_id)
            .all()
        )
        return [position_id for (position_id,) in rows]

    def create(self, data: AnnouncementCreate, author_id: str | None = None) -> Announcement:
        announcement = Announcement(title=data.title, body=data.body, author_id=author_id)
        self.db.add(announcement)
        self.db.flush()
        for position_id in data.position_ids:
            self.db.add(
                AnnouncementPosition(announcement_id=announcement.id, position_id=position_id)
            )
        self.db.commit()
        self.db.refresh(announcement)
        return announcement
