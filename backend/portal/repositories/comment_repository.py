"""Repository for comment threads."""

from __future__ import annotations

from sqlalchemy.orm import Session

from portal.core.auth import ROLE_ADMINISTRATOR
from portal.models.comment import Comment


def seen_column(viewer_role: str):  # type: ignore[no-untyped-def]
    """Column holding the given role's "seen" flag."""
    if viewer_role == ROLE_ADMINISTRATOR:
        return Comment.seen_by_admin
    return Comment.seen_by_requester


class CommentRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        thread_type: str,
        thread_id: str,
        author_id: str,
        author_role: str,
        body: str,
        parent_id: int | None = None,
    ) -> Comment:
        is_admin = author_role == ROLE_ADMINISTRATOR
        comment = Comment(
            thread_type=thread_type,
            thread_id=thread_id,
            author_id=author_id,
            author_role=author_role,
            body=body,
            parent_id=parent_id,
            seen_by_admin=is_admin,
            seen_by_requester=not is_admin,
        )
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def get_by_id(self, comment_id: int) -> Comment | None:
        return self.db.query(Comment).filter(Comment.id == comment_id).first()

    def get_thread(self, thread_type: str, thread_id: str) -> list[Comment]:
        """All comments of a thread, newest first."""
        return (
            self.db.query(Comment)
            .filter(Comment.thread_type == thread_type, Comment.thread_id == thread_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .all()
        )

    def _unseen_query(self, thread_type: str, thread_id: str, viewer_role: str):  # type: ignore[no-untyped-def]
        return self.db.query(Comment).filter(
            Comment.thread_type == thread_type,
            Comment.thread_id == thread_id,
            Comment.author_role != viewer_role,
            seen_column(viewer_role) == False,  # noqa: E712
        )

    def count_unseen(self, thread_type: str, thread_id: str, viewer_role: str) -> int:
        return self._unseen_query(thread_type, thread_id, viewer_role).count()

    def get_unseen_ids(self, thread_type: str, thread_id: str, viewer_role: str) -> list[int]:
        rows = self._unseen_query(thread_type, thread_id, viewer_role).with_entities(Comment.id)
        return [comment_id for (comment_id,) in rows.all()]

    def count_unseen_by_thread(
        self, thread_type: str, thread_ids: list[str], viewer_role: str
    ) -> dict[str, int]:
        counts = {thread_id: 0 for thread_id in thread_ids}
        if not thread_ids:
            return counts
        rows = (
            self.db.query(Comment.thread_id)
            .filter(
                Comment.thread_type == thread_type,
                Comment.thread_id.in_(thread_ids),
                Comment.author_role != viewer_role,
                seen_column(viewer_role) == False,  # noqa: E712
            )
            .all()
        )
        for (thread_id,) in rows:
            counts[thread_id] += 1
        return counts

    def mark_seen(self, thread_type: str, thread_id: str, viewer_role: str) -> int:
        """Flip the viewer role's seen flag on the other role's comments.

        Returns the number of rows updated; 0 when everything was already seen.
        """
        column = seen_column(viewer_role)
        count = self._unseen_query(thread_type, thread_id, viewer_role).update({column: True})
        self.db.commit()
        return count
