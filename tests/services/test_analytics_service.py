import pytest
from badminton_squad.models import UserAnalytics
from badminton_squad.services.analytics_service import AnalyticsService
from badminton_squad.services.exceptions import (
    BusinessRuleViolationError,
    PermissionDeniedError,
)


def test_complete_session_records_analytics(
    db_session, make_profile, make_session, make_response
):
    creator = make_profile()
    session = make_session(creator)
    coming = [make_profile() for _ in range(3)]
    for player in coming:
        make_response(session, player, "COMING")
    skipper = make_profile()
    maybe = make_profile()
    make_response(session, skipper, "NOT_COMING")
    make_response(session, maybe, "TENTATIVE")

    result = AnalyticsService(db_session).complete_session(
        session.id, actual_attendees=2, completed_by=creator
    )

    assert result["records_created"] == 5
    summary = result["session_analytics"]
    assert summary.total_responses == 5
    assert summary.predicted_attendance == 3
    assert summary.actual_attendance == 2
    assert summary.accuracy_rate == 80.0

    rows = {row.user_id: row for row in db_session.query(UserAnalytics).all()}
    assert rows[coming[0].id].actual_attendance is True
    assert rows[skipper.id].actual_attendance is False
    assert rows[maybe.id].actual_attendance is None

    db_session.refresh(session)
    assert session.completed_at is not None


def test_only_creator_can_complete(db_session, make_profile, make_session):
    session = make_session(make_profile())

    with pytest.raises(PermissionDeniedError, match="Only session creator"):
        AnalyticsService(db_session).complete_session(
            session.id, actual_attendees=4, completed_by=make_profile()
        )


def test_cannot_complete_twice(db_session, make_profile, make_session, make_response):
    creator = make_profile()
    session = make_session(creator)
    make_response(session, make_profile(), "COMING")
    service = AnalyticsService(db_session)

    service.complete_session(session.id, actual_attendees=1, completed_by=creator)

    with pytest.raises(BusinessRuleViolationError, match="already been completed"):
        service.complete_session(session.id, actual_attendees=1, completed_by=creator)

    assert db_session.query(UserAnalytics).count() == 1


def test_negative_attendees_rejected(db_session, make_profile, make_session):
    creator = make_profile()
    session = make_session(creator)

    with pytest.raises(BusinessRuleViolationError):
        AnalyticsService(db_session).complete_session(
            session.id, actual_attendees=-1, completed_by=creator
        )


def test_user_accuracy_across_sessions(
    db_session, make_profile, make_session, make_response
):
    creator = make_profile()
    player = make_profile()
    service = AnalyticsService(db_session)

    for status in ["COMING", "NOT_COMING", "TENTATIVE", "COMING"]:
        session = make_session(creator)
        make_response(session, player, status)
        service.complete_session(session.id, actual_attendees=1, completed_by=creator)

    accuracy = service.get_user_accuracy(player.id)

    assert accuracy.user_id == player.id
    assert accuracy.total_predictions == 3
    assert accuracy.correct_predictions == 3
    assert accuracy.accuracy_percentage == 100.0
    assert accuracy.reliability_score == 100


def test_user_accuracy_without_history(db_session, make_profile):
    accuracy = AnalyticsService(db_session).get_user_accuracy(make_profile().id)

    assert accuracy.total_predictions == 0
    assert accuracy.reliability_score == 50
