def test_activity_feed(client_for, make_profile, make_session, make_response):
    me = make_profile()
    make_session(me)
    make_response(make_session(make_profile()), me, "NOT_COMING")

    response = client_for(me).get("/api/users/activity")

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["activities"]) == 2
    assert data["metadata"]["created_sessions_count"] == 1
    assert data["metadata"]["responded_sessions_count"] == 1


def test_activity_filter_and_pagination(client_for, make_profile, make_session):
    me = make_profile()
    for _ in range(3):
        make_session(me)

    response = client_for(me).get(
        "/api/users/activity", params={"filter": "created", "limit": 2, "offset": 0}
    )

    metadata = response.json()["data"]["metadata"]
    assert metadata["filter"] == "created"
    assert metadata["total_activities"] == 2
    assert metadata["has_more"] is True


def test_activity_rejects_negative_offset(client_for, make_profile):
    response = client_for(make_profile()).get("/api/users/activity", params={"offset": -1})
    assert response.status_code == 400


def test_my_accuracy(client_for, make_profile, make_session, make_response):
    creator = make_profile()
    me = make_profile()
    session = make_session(creator)
    make_response(session, me, "COMING")
    client_for(creator).post(f"/api/sessions/{session.id}/complete", json={"actualAttendees": 1})

    response = client_for(me).get("/api/users/me/accuracy")

    accuracy = response.json()["data"]["accuracy"]
    assert accuracy["user_id"] == me.id
    assert accuracy["total_predictions"] == 1
    assert accuracy["reliability_score"] == 50


def test_health(client_for):
    response = client_for().get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
