from datetime import datetime, timezone
from typing import Any, Dict, List
from .constants import SquadConstants

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _sort_key(comment: Dict[str, Any]) -> datetime:
    created_at = comment.get("created_at")
    if created_at is None:
        return _EPOCH
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


def build_comment_tree(comments: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Nest a flat list of comments under their parents.

    Each comment dict needs ``id``, ``parent_comment_id`` and ``created_at``.
    Returns the root comments, each with a ``replies`` list, ordered oldest
    first at every level. Replies whose parent is not in the list are dropped.
    The input dicts are not modified.
    """
    by_id: Dict[str, Dict[str, Any]] = {}
    for comment in comments:
        by_id[comment["id"]] = {**comment, "replies": []}

    roots = []
    for comment in comments:
        node = by_id[comment["id"]]
        parent_id = comment.get("parent_comment_id")

        if parent_id:
            parent = by_id.get(parent_id)
            if parent is not None:
                parent["replies"].append(node)
        else:
            roots.append(node)

    _sort_level(roots)
    return roots


def _sort_level(nodes: List[Dict[str, Any]]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        _sort_level(node["replies"])


def comment_tree_depth(comment: Dict[str, Any], current_depth: int = 0) -> int:
    replies = comment.get("replies") or []
    if not replies:
        return current_depth
    return max(comment_tree_depth(reply, current_depth + 1) for reply in replies)


def validate_comment_depth(
    tree: List[Dict[str, Any]], max_depth: int = SquadConstants.MAX_COMMENT_DEPTH
) -> bool:
    return all(comment_tree_depth(comment) <= max_depth for comment in tree)
