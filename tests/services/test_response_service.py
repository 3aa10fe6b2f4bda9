import pytest
from datetime import timedelta
from badminton_squad.models import SessionResponse
from badminton_squad.models.enums import ResponseStatus
from badminton_squad.services.exceptions import ValidationFailedError
from badminton_squad.services.response_service import ResponseService, ResponseCutoffError
from badminton_squad.services.session_service import SessionNotFoundError
from badminton_squad.utils.date_helpers import DateHelpers
from tests.conftest import ist_time


def test_first_response_is_inserted(db_session, make_profile, make_session):
    player = make_profile()
    session = make_session(make_profile())

    response = ResponseService(db_session).upsert_response(
        session.id, ResponseStatus.COMING, user=player
    )

    assert response.status == "COMING"
    assert response.user_id == player.id
    assert db_session.query(SessionResponse).count() == 1


def test_second_response_overwrites(db_session, make_profile, make_session):
    player = make_profile()
    session = make_session(make_profile())
    service = ResponseService(db_session)

    first = service.upsert_response(session.id, "COMING", user=player)
    second = service.upsert_response(session.id, "TENTATIVE", user=player)

    assert first.id == second.id
    assert second.status == "TENTATIVE"
    assert db_session.query(SessionResponse).count() == 1


def test_invalid_status(db_session, make_profile, make_session):
    session = make_session(make_profile())

    with pytest.raises(ValidationFailedError, match="Invalid status"):
        ResponseService(db_session).upsert_response(session.id, "MAYBE", user=make_profile())


def test_unknown_session(db_session, make_profile):
    with pytest.raises(SessionNotFoundError):
        ResponseService(db_session).upsert_response("missing", "COMING", user=make_profile())


def test_cutoff_boundary(db_session, make_profile, make_session):
    player = make_profile()
    start = ist_time(days_ahead=3, hour=18)
    session = make_session(make_profile(), start=start)
    cutoff = DateHelpers.response_cutoff(start)
    service = ResponseService(db_session)

    service.upsert_response(
        session.id, "COMING", user=player, now=cutoff - timedelta(seconds=1)
    )

    with pytest.raises(ResponseCutoffError, match="Response cutoff has passed"):
        service.upsert_response(session.id, "NOT_COMING", user=player, now=cutoff)

    db_session.expire_all()
    stored = db_session.query(SessionResponse).one()
    assert stored.status == "COMING"


def test_response_rejected_for_session_tomorrow(db_session, make_profile, make_session):
    session = make_session(make_profile(), start=ist_time(days_ahead=1, hour=19))

    with pytest.raises(ResponseCutoffError):
        ResponseService(db_session).upsert_response(session.id, "COMING", user=make_profile())


def test_list_session_responses_includes_names(
    db_session, make_profile, make_session, make_response
):
    session = make_session(make_profile())
    alice = make_profile(name="Alice")
    bob = make_profile(name="Bob")
    make_response(session, alice, "COMING")
    make_response(session, bob, "NOT_COMING")

    responses = ResponseService(db_session).list_session_responses(session.id)

    by_name = {r.user_name: r.status for r in responses}
    assert by_name == {"Alice": ResponseStatus.COMING, "Bob": ResponseStatus.NOT_COMING}
