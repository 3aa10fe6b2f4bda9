from types import SimpleNamespace
from badminton_squad.models import Profile

AUTH_HEADER = {"Authorization": "Bearer test-token"}
USER_ID = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


def supabase_user(email="shuttle@example.com", name="Shuttle Fan"):
    return SimpleNamespace(id=USER_ID, email=email, user_metadata={"name": name})


def test_signup_creates_pending_profile(client_for, fake_supabase, db_session):
    fake_supabase.auth.sign_up.return_value = SimpleNamespace(user=supabase_user())

    response = client_for().post(
        "/api/auth/signup",
        json={
            "email": "shuttle@example.com",
            "password": "smash-it-123",
            "name": "  Shuttle Fan ",
            "phone": "+91 98765 43210",
        },
    )

    assert response.status_code == 201
    user = response.json()["data"]["user"]
    assert user["id"] == USER_ID
    assert user["name"] == "Shuttle Fan"
    assert user["approved"] is False
    assert user["role"] == "normal_user"
    assert db_session.query(Profile).filter_by(id=USER_ID).one().approved is False


def test_signup_duplicate_email(client_for, fake_supabase, make_profile):
    existing = make_profile()

    response = client_for().post(
        "/api/auth/signup",
        json={"email": existing.email, "password": "password123", "name": "Again"},
    )

    assert response.status_code == 400
    fake_supabase.auth.sign_up.assert_not_called()


def test_signup_validation(client_for):
    response = client_for().post(
        "/api/auth/signup",
        json={"email": "not-an-email", "password": "short", "name": "X", "phone": "12"},
    )

    assert response.status_code == 400
    details = response.json()["details"]
    assert {"email", "password", "phone"} <= set(details)


def test_login_returns_token(client_for, fake_supabase):
    fake_supabase.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=supabase_user(),
        session=SimpleNamespace(access_token="jwt-token", expires_in=3600),
    )

    response = client_for().post(
        "/api/auth/login",
        json={"email": "shuttle@example.com", "password": "smash-it-123"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["access_token"] == "jwt-token"
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == USER_ID
    assert body["user"]["approved"] is False


def test_login_with_bad_credentials(client_for, fake_supabase):
    fake_supabase.auth.sign_in_with_password.side_effect = Exception("Invalid login")

    response = client_for().post(
        "/api/auth/login",
        json={"email": "shuttle@example.com", "password": "wrong-password"},
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


def test_me_backfills_profile_for_unapproved_user(client_for, fake_supabase, db_session):
    fake_supabase.auth.get_user.return_value = SimpleNamespace(user=supabase_user())

    response = client_for().get("/api/auth/me", headers=AUTH_HEADER)

    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == "shuttle@example.com"
    fake_supabase.auth.get_user.assert_called_once_with("test-token")
    assert db_session.query(Profile).filter_by(id=USER_ID).count() == 1


def test_unapproved_token_is_blocked_from_sessions(client_for, fake_supabase):
    fake_supabase.auth.get_user.return_value = SimpleNamespace(user=supabase_user())

    response = client_for().get("/api/sessions/", headers=AUTH_HEADER)

    assert response.status_code == 403


def test_invalid_token(client_for, fake_supabase):
    fake_supabase.auth.get_user.side_effect = Exception("JWT expired")

    response = client_for().get("/api/auth/me", headers=AUTH_HEADER)

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_signout(client_for, fake_supabase, make_profile):
    response = client_for(make_profile()).post("/api/auth/signout")

    assert response.status_code == 200
    fake_supabase.auth.sign_out.assert_called_once()
