"""Pydantic schemas for comment threads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from portal.services.comment_tree import CommentNode


class CommentCreate(BaseModel):
    body: str = Field(..., min_length=1, max_length=5000)
    parent_id: int | None = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    thread_type: str
    thread_id: str
    author_id: str
    author_role: str
    body: str
    created_at: datetime
    parent_id: int | None = None
    seen_by_admin: bool
    seen_by_requester: bool


class CommentNodeResponse(CommentResponse):
    replies: list[CommentNodeResponse] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: CommentNode) -> CommentNodeResponse:
        base = CommentResponse.model_validate(node.comment)
        return cls(
            **base.model_dump(),
            replies=[cls.from_node(reply) for reply in node.replies],
        )


class UnseenCountResponse(BaseModel):
    thread_type: str
    thread_id: str
    unseen_count: int


class ThreadOpenResponse(BaseModel):
    unseen_count: int
    comments: list[CommentNodeResponse]
