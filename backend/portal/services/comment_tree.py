"""Assemble flat comment rows into reply trees.

Every threaded discussion in the portal (announcements, medical leave,
permits, certifications) stores comments as flat rows with an optional
parent reference. This module turns such a list back into a forest.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CommentNode:
    comment: Any
    replies: list[CommentNode] = field(default_factory=list)


def build_comment_tree(
    comments: Sequence[Any],
    id_attr: str = "id",
    parent_attr: str = "parent_id",
) -> list[CommentNode]:
    """Build the reply forest for one thread.

    The input is expected newest-first, as the thread query returns it.
    Roots and every ``replies`` list keep the input order. A comment whose
    parent is not in ``comments`` becomes a root instead of being dropped.

    Args:
        comments: Flat rows of a single thread (objects or mappings).
        id_attr: Name of the row id field.
        parent_attr: Name of the parent reference field.

    Returns:
        The root nodes, each with its replies populated recursively.
    """
    nodes: dict[Any, CommentNode] = {}
    for comment in comments:
        nodes[_get(comment, id_attr)] = CommentNode(comment)

    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[_get(comment, id_attr)]
        parent_id = _get(comment, parent_attr)
        if parent_id is not None and parent_id in nodes:
            nodes[parent_id].replies.append(node)
        else:
            roots.append(node)
    return roots


def count_nodes(forest: Iterable[CommentNode]) -> int:
    total = 0
    stack = list(forest)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.replies)
    return total


def _get(comment: Any, attr: str) -> Any:
    if isinstance(comment, dict):
        return comment.get(attr)
    return getattr(comment, attr)
