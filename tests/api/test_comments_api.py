from datetime import datetime, timedelta, timezone


def comments_url(session):
    return f"/api/sessions/{session.id}/comments"


def test_post_reply_and_list_tree(client_for, make_profile, make_session):
    author = make_profile(name="Meera")
    session = make_session(make_profile())
    client = client_for(author)

    root = client.post(comments_url(session), json={"content": "Who has shuttles?"})
    assert root.status_code == 201
    root_id = root.json()["data"]["comment"]["id"]

    reply = client.post(
        comments_url(session),
        json={"content": "I do", "parent_comment_id": root_id},
    )
    assert reply.status_code == 201
    assert reply.json()["data"]["comment"]["parent_comment_id"] == root_id

    tree = client.get(comments_url(session)).json()["data"]["comments"]
    assert len(tree) == 1
    assert tree[0]["user"] == {"id": author.id, "name": "Meera"}
    assert [r["content"] for r in tree[0]["replies"]] == ["I do"]


def test_reply_to_comment_on_another_session(
    client_for, make_profile, make_session, make_comment
):
    user = make_profile()
    other_comment = make_comment(make_session(user), user)
    session = make_session(user)

    response = client_for(user).post(
        comments_url(session),
        json={"content": "Lost", "parent_comment_id": other_comment.id},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Parent comment not found or belongs to different session"


def test_empty_comment_rejected(client_for, make_profile, make_session):
    session = make_session(make_profile())

    response = client_for(make_profile()).post(comments_url(session), json={"content": "  "})

    assert response.status_code == 400
    assert "content" in response.json()["details"]


def test_edit_comment(client_for, make_profile, make_session, make_comment):
    author = make_profile()
    session = make_session(make_profile())
    comment = make_comment(session, author, "Typo")

    response = client_for(author).put(
        f"{comments_url(session)}/{comment.id}", json={"content": "Fixed"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["comment"]["content"] == "Fixed"


def test_edit_old_comment_rejected(client_for, make_profile, make_session, make_comment):
    author = make_profile()
    session = make_session(make_profile())
    comment = make_comment(
        session, author, created_at=datetime.now(timezone.utc) - timedelta(days=2)
    )

    response = client_for(author).put(
        f"{comments_url(session)}/{comment.id}", json={"content": "Late edit"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Comment is too old to edit (24 hour limit)"


def test_session_creator_can_delete_any_comment(
    client_for, make_profile, make_session, make_comment
):
    creator = make_profile()
    session = make_session(creator)
    comment = make_comment(session, make_profile(), "Off topic")
    client = client_for(creator)

    response = client.delete(f"{comments_url(session)}/{comment.id}")

    assert response.status_code == 200
    assert client.get(comments_url(session)).json()["data"]["comments"] == []


def test_bystander_cannot_delete_or_edit(
    client_for, make_profile, make_session, make_comment
):
    session = make_session(make_profile())
    comment = make_comment(session, make_profile())
    client = client_for(make_profile())

    assert client.delete(f"{comments_url(session)}/{comment.id}").status_code == 403
    assert (
        client.put(f"{comments_url(session)}/{comment.id}", json={"content": "x"}).status_code
        == 403
    )


def test_unknown_comment(client_for, make_profile, make_session):
    session = make_session(make_profile())

    response = client_for(make_profile()).delete(f"{comments_url(session)}/missing")

    assert response.status_code == 404
    assert response.json()["error"] == "Comment not found"
