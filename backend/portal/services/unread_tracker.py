"""Per-thread unread comment badges for one viewer role.

A viewer (administrator or requester) sees a badge with the number of
comments written by the other role that it has not opened yet. Counts are
loaded from storage, bumped by realtime inserts, and cleared when the
thread is opened.

Realtime inserts are applied as patches keyed by comment id: a comment is
counted at most once per thread, whether it arrived through a refetch or
through the feed, so redelivered or late events cannot inflate a badge.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.models.comment import Comment
from portal.repositories.comment_repository import CommentRepository
from portal.services.comment_feed import CommentEvent, CommentFeed
from portal.services.comment_tree import CommentNode, build_comment_tree

logger = logging.getLogger(__name__)

ThreadKey = tuple[str, str]


class MarkSeenError(RuntimeError):
    """Persisting the "seen" flags failed; local counters were left untouched."""


class UnreadCountTracker:
    def __init__(self, db: Session, viewer_role: str, feed: CommentFeed | None = None):
        self.db = db
        self.viewer_role = viewer_role
        self.repo = CommentRepository(db)
        self._counted: dict[ThreadKey, set[int]] = {}
        self._unsubscribe: Callable[[], None] | None = None
        if feed is not None:
            self._unsubscribe = feed.subscribe(self.on_remote_insert)

    def get_count(self, thread_type: str, thread_id: str) -> int:
        """Current in-memory badge value (0 for threads never loaded)."""
        return len(self._counted.get((thread_type, thread_id), ()))

    def compute_unseen(self, thread_type: str, thread_id: str) -> int:
        """Reload the badge for one thread from storage."""
        ids = self.repo.get_unseen_ids(thread_type, thread_id, self.viewer_role)
        self._counted[(thread_type, thread_id)] = set(ids)
        return len(ids)

    def refresh(self, thread_type: str, thread_id: str) -> int:
        """Invalidate the local badge and recompute it from storage."""
        return self.compute_unseen(thread_type, thread_id)

    def compute_unseen_many(self, thread_type: str, thread_ids: list[str]) -> dict[str, int]:
        return {thread_id: self.compute_unseen(thread_type, thread_id) for thread_id in thread_ids}

    def mark_seen(self, thread_type: str, thread_id: str) -> int:
        """Persist the viewer's seen flag on every unseen comment of the thread.

        Idempotent: a second call updates nothing and returns 0.

        Raises:
            MarkSeenError: if the update could not be committed.
        """
        try:
            updated = self.repo.mark_seen(thread_type, thread_id, self.viewer_role)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning(
                "Failed to mark %s/%s as seen for %s: %s",
                thread_type,
                thread_id,
                self.viewer_role,
                exc,
            )
            raise MarkSeenError(str(exc)) from exc
        logger.debug(
            "Marked %d comments seen on %s/%s for %s",
            updated,
            thread_type,
            thread_id,
            self.viewer_role,
        )
        return updated

    def on_remote_insert(self, comment: Comment | CommentEvent) -> bool:
        """Apply a pushed insert; returns True if the badge changed."""
        if comment.author_role == self.viewer_role:
            return False
        counted = self._counted.setdefault((comment.thread_type, comment.thread_id), set())
        if comment.id in counted:
            return False
        counted.add(comment.id)
        return True

    def open_thread(self, thread_type: str, thread_id: str) -> list[CommentNode]:
        """Mark the thread seen, clear its badge, then load it for display.

        The badge is cleared only after the mark-seen update is committed,
        so a failure leaves the count as it was.
        """
        self.mark_seen(thread_type, thread_id)
        self._counted[(thread_type, thread_id)] = set()
        return build_comment_tree(self.repo.get_thread(thread_type, thread_id))

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
