"""In-process change feed for newly inserted comments.

Plays the role of the realtime "postgres_changes" channel: the comment
service publishes every insert and unread trackers subscribe to it.
Subscribers must treat events as triggers, not authoritative state.

One feed lives on ``app.state.comment_feed`` for the lifetime of the app.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from starlette.requests import HTTPConnection

from portal.models.comment import Comment

logger = logging.getLogger(__name__)

Subscriber = Callable[[Comment], None]


@dataclass(frozen=True)
class CommentEvent:
    """Detached copy of the fields a badge needs from an inserted comment."""

    id: int
    thread_type: str
    thread_id: str
    author_role: str

    @classmethod
    def from_comment(cls, comment: Comment) -> CommentEvent:
        return cls(
            id=comment.id,  # type: ignore[arg-type]
            thread_type=str(comment.thread_type),
            thread_id=str(comment.thread_id),
            author_role=str(comment.author_role),
        )


class CommentFeed:
    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._lock = Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""
        with self._lock:
            self._subscribers.append(callback)
        logger.debug("Comment feed subscriber added (%d active)", len(self._subscribers))

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)
            logger.debug("Comment feed subscriber removed (%d active)", len(self._subscribers))

        return unsubscribe

    def publish(self, comment: Comment) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(comment)
            except Exception:
                logger.exception("Comment feed subscriber failed for comment %s", comment.id)

    def clear(self) -> None:
        """Drop all subscribers (useful for testing)."""
        with self._lock:
            self._subscribers.clear()


def get_comment_feed(connection: HTTPConnection) -> CommentFeed:
    """FastAPI dependency returning the app's feed (HTTP and websocket)."""
    return connection.app.state.comment_feed  # type: ignore[no-any-return]
