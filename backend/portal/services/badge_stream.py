"""Live unseen-comment badges for one connected viewer.

A stream watches a set of threads of one kind. It loads their badges from
storage, then turns every comment pushed on the feed into a badge update
through the viewer's ``UnreadCountTracker``. Only changes are emitted:
comments by the viewer's own role, redeliveries and other threads are
dropped.

Feed callbacks may run on another thread or event loop (the request that
inserted the comment), so they only hand a detached ``CommentEvent`` to
this stream's loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from portal.models.comment import Comment
from portal.services.comment_feed import CommentEvent, CommentFeed
from portal.services.unread_tracker import UnreadCountTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeUpdate:
    thread_type: str
    thread_id: str
    unseen_count: int


class BadgeStream:
    def __init__(
        self,
        tracker: UnreadCountTracker,
        feed: CommentFeed,
        thread_type: str,
        thread_ids: Iterable[str],
    ):
        self.tracker = tracker
        self.thread_type = thread_type
        self.thread_ids = list(dict.fromkeys(thread_ids))
        self._watched = set(self.thread_ids)
        self._loop = asyncio.get_running_loop()
        self._queue: asyncio.Queue[CommentEvent] = asyncio.Queue()
        # Subscribe before the initial load; overlap is absorbed by the
        # tracker's per-comment dedup.
        self._unsubscribe = feed.subscribe(self._on_publish)

    def _on_publish(self, comment: Comment) -> None:
        event = CommentEvent.from_comment(comment)
        if event.thread_type != self.thread_type or event.thread_id not in self._watched:
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def initial(self) -> list[BadgeUpdate]:
        counts = self.tracker.compute_unseen_many(self.thread_type, self.thread_ids)
        return [BadgeUpdate(self.thread_type, tid, count) for tid, count in counts.items()]

    async def next_update(self) -> BadgeUpdate:
        """Wait for the next pushed comment that changes a badge."""
        while True:
            event = await self._queue.get()
            if self.tracker.on_remote_insert(event):
                return BadgeUpdate(
                    event.thread_type,
                    event.thread_id,
                    self.tracker.get_count(event.thread_type, event.thread_id),
                )
            logger.debug("Ignored comment %s for %s badges", event.id, self.tracker.viewer_role)

    def close(self) -> None:
        self._unsubscribe()
