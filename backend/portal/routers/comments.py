"""Comment thread API endpoints."""

import asyncio
import contextlib
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from portal.core.auth import Viewer, get_current_viewer
from portal.core.database import get_db
from portal.models.comment import ThreadType
from portal.schemas.comment import (
    CommentCreate,
    CommentNodeResponse,
    CommentResponse,
    ThreadOpenResponse,
    UnseenCountResponse,
)
from portal.services.badge_stream import BadgeStream
from portal.services.comment_feed import CommentFeed, get_comment_feed
from portal.services.comment_service import CommentService, InvalidParentError
from portal.services.unread_tracker import MarkSeenError, UnreadCountTracker

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{thread_type}/unseen_counts",
    response_model=list[UnseenCountResponse],
    summary="Unseen comment counts for several threads",
    responses={401: {"description": "Missing viewer identity"}},
)
async def list_unseen_counts(
    thread_type: ThreadType,
    thread_ids: list[str] = Query(default=[]),
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> list[UnseenCountResponse]:
    """Badge values for the rows of a list page."""
    tracker = UnreadCountTracker(db, viewer.role)
    counts = tracker.compute_unseen_many(thread_type.value, thread_ids)
    return [
        UnseenCountResponse(thread_type=thread_type.value, thread_id=tid, unseen_count=count)
        for tid, count in counts.items()
    ]


@router.get(
    "/{thread_type}/{thread_id}/comments",
    response_model=list[CommentNodeResponse],
    summary="Get a comment thread",
    responses={401: {"description": "Missing viewer identity"}},
)
async def get_thread(
    thread_type: ThreadType,
    thread_id: str,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> list[CommentNodeResponse]:
    """Return the thread as a forest of root comments, newest first."""
    service = CommentService(db)
    return [CommentNodeResponse.from_node(n) for n in service.get_tree(thread_type.value, thread_id)]


@router.post(
    "/{thread_type}/{thread_id}/comments",
    response_model=CommentResponse,
    status_code=201,
    summary="Post a comment or reply",
    responses={
        400: {"description": "Reply target not in this thread"},
        401: {"description": "Missing viewer identity"},
    },
)
async def post_comment(
    thread_type: ThreadType,
    thread_id: str,
    data: CommentCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
    feed: CommentFeed = Depends(get_comment_feed),
) -> CommentResponse:
    service = CommentService(db, feed=feed)
    try:
        comment = service.post(
            thread_type=thread_type.value,
            thread_id=thread_id,
            author_id=viewer.user_id,
            author_role=viewer.role,
            body=data.body,
            parent_id=data.parent_id,
        )
    except InvalidParentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return CommentResponse.model_validate(comment)


@router.get(
    "/{thread_type}/{thread_id}/comments/unseen_count",
    response_model=UnseenCountResponse,
    summary="Unseen comment count",
    responses={401: {"description": "Missing viewer identity"}},
)
async def get_unseen_count(
    thread_type: ThreadType,
    thread_id: str,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> UnseenCountResponse:
    """Comments by the other role that the viewer has not opened yet."""
    tracker = UnreadCountTracker(db, viewer.role)
    return UnseenCountResponse(
        thread_type=thread_type.value,
        thread_id=thread_id,
        unseen_count=tracker.compute_unseen(thread_type.value, thread_id),
    )


@router.post(
    "/{thread_type}/{thread_id}/comments/open",
    response_model=ThreadOpenResponse,
    summary="Open a thread and mark it seen",
    responses={
        401: {"description": "Missing viewer identity"},
        500: {"description": "Seen flags could not be stored"},
    },
)
async def open_thread(
    thread_type: ThreadType,
    thread_id: str,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> ThreadOpenResponse:
    tracker = UnreadCountTracker(db, viewer.role)
    tracker.compute_unseen(thread_type.value, thread_id)
    try:
        tree = tracker.open_thread(thread_type.value, thread_id)
    except MarkSeenError:
        raise HTTPException(
            status_code=500, detail="Could not mark comments as seen"
        ) from None
    return ThreadOpenResponse(
        unseen_count=tracker.get_count(thread_type.value, thread_id),
        comments=[CommentNodeResponse.from_node(n) for n in tree],
    )


async def _until_disconnect(websocket: WebSocket) -> None:
    with contextlib.suppress(WebSocketDisconnect):
        while True:
            await websocket.receive_text()


async def _push_updates(websocket: WebSocket, stream: BadgeStream) -> None:
    while True:
        update = await stream.next_update()
        await websocket.send_json(asdict(update))


@router.websocket("/{thread_type}/unseen_counts/stream")
async def stream_unseen_counts(
    websocket: WebSocket,
    thread_type: ThreadType,
    thread_ids: list[str] = Query(default=[]),
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
    feed: CommentFeed = Depends(get_comment_feed),
) -> None:
    """Send the current badges of ``thread_ids``, then every change as it happens.

    Each message is ``{"thread_type", "thread_id", "unseen_count"}``.
    """
    await websocket.accept()
    stream = BadgeStream(UnreadCountTracker(db, viewer.role), feed, thread_type.value, thread_ids)
    try:
        initial = stream.initial()
        # Later updates come from the feed only
        db.close()
        for update in initial:
            await websocket.send_json(asdict(update))

        tasks = {
            asyncio.create_task(_push_updates(websocket, stream)),
            asyncio.create_task(_until_disconnect(websocket)),
        }
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            if task.exception() is not None:
                logger.debug("Badge stream for %s ended: %s", viewer.user_id, task.exception())
    finally:
        stream.close()
