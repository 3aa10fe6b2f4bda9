from datetime import datetime, timedelta, timezone
from badminton_squad.utils.comment_tree import (
    build_comment_tree,
    comment_tree_depth,
    validate_comment_depth,
)

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def comment(id, parent=None, minutes=0):
    return {
        "id": id,
        "parent_comment_id": parent,
        "created_at": T0 + timedelta(minutes=minutes),
        "content": f"comment {id}",
    }


def test_builds_nested_chain():
    tree = build_comment_tree(
        [comment("C", parent="B", minutes=2), comment("A"), comment("B", parent="A", minutes=1)]
    )

    assert [c["id"] for c in tree] == ["A"]
    b = tree[0]["replies"][0]
    assert b["id"] == "B"
    assert [c["id"] for c in b["replies"]] == ["C"]
    assert b["replies"][0]["replies"] == []


def test_orders_oldest_first_at_every_level():
    tree = build_comment_tree(
        [
            comment("late-root", minutes=10),
            comment("root", minutes=0),
            comment("r2", parent="root", minutes=5),
            comment("r1", parent="root", minutes=3),
        ]
    )

    assert [c["id"] for c in tree] == ["root", "late-root"]
    assert [c["id"] for c in tree[0]["replies"]] == ["r1", "r2"]


def test_orphaned_replies_are_dropped():
    tree = build_comment_tree([comment("A"), comment("X", parent="missing")])
    assert [c["id"] for c in tree] == ["A"]
    assert tree[0]["replies"] == []


def test_missing_timestamps_sort_first():
    undated = {"id": "U", "parent_comment_id": None, "created_at": None}
    tree = build_comment_tree([comment("A"), undated])
    assert [c["id"] for c in tree] == ["U", "A"]


def test_input_is_not_mutated():
    flat = [comment("A"), comment("B", parent="A")]
    build_comment_tree(flat)
    assert "replies" not in flat[0]


def test_empty_input():
    assert build_comment_tree([]) == []


def test_depth_validation():
    tree = build_comment_tree(
        [
            comment("A"),
            comment("B", parent="A", minutes=1),
            comment("C", parent="B", minutes=2),
            comment("D", parent="C", minutes=3),
            comment("E", parent="D", minutes=4),
        ]
    )
    assert comment_tree_depth(tree[0]) == 4
    assert not validate_comment_depth(tree)
    assert validate_comment_depth(tree, max_depth=4)
