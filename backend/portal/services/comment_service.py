"""Service for posting to and reading comment threads."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from portal.models.comment import Comment
from portal.repositories.comment_repository import CommentRepository
from portal.services.comment_feed import CommentFeed
from portal.services.comment_tree import CommentNode, build_comment_tree

logger = logging.getLogger(__name__)


class InvalidParentError(ValueError):
    """The reply target does not exist in the same thread."""


class CommentService:
    def __init__(self, db: Session, feed: CommentFeed | None = None):
        self.db = db
        self.repo = CommentRepository(db)
        self.feed = feed

    def get_tree(self, thread_type: str, thread_id: str) -> list[CommentNode]:
        return build_comment_tree(self.repo.get_thread(thread_type, thread_id))

    def post(
        self,
        *,
        thread_type: str,
        thread_id: str,
        author_id: str,
        author_role: str,
        body: str,
        parent_id: int | None = None,
    ) -> Comment:
        """Create a root comment or a reply and announce it on the feed."""
        if parent_id is not None:
            parent = self.repo.get_by_id(parent_id)
            if (
                parent is None
                or parent.thread_type != thread_type
                or parent.thread_id != thread_id
            ):
                raise InvalidParentError(f"Comment {parent_id} not found in this thread")

        comment = self.repo.create(
            thread_type=thread_type,
            thread_id=thread_id,
            author_id=author_id,
            author_role=author_role,
            body=body,
            parent_id=parent_id,
        )
        logger.info(
            "Comment %s posted on %s/%s by %s", comment.id, thread_type, thread_id, author_role
        )
        if self.feed is not None:
            self.feed.publish(comment)
        return comment
