"""
Auth flow through the HTTP layer: register -> login -> role landing -> logout,
plus the idle-session timeout.
"""
import time

from car_rental.models import db, User
from car_rental.utils.constants import SESSION_USER_ID, SESSION_LAST_SEEN


def _session_user_id(client):
    with client.session_transaction() as sess:
        return sess.get(SESSION_USER_ID)


def _register(client, email, password="Secret123", role="Customer", confirm=None, follow=True):
    return client.post(
        "/Account/Register",
        data={
            "first_name": "Ann", "last_name": "Lee", "email": email,
            "password": password, "confirm_password": confirm if confirm is not None else password,
            "phone_number": "01700000000", "address": "", "role": role,
        },
        follow_redirects=follow,
    )


def test_register_redirects_to_login_with_notice(client):
    r = _register(client, "ann@example.com", follow=False)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/Account/Login")

    r = client.get("/Account/Login")
    assert "Registration successful! Please login." in r.get_data(as_text=True)


def test_register_duplicate_email_shows_error(client):
    _register(client, "bob@example.com")
    r = _register(client, "bob@example.com")
    assert r.status_code == 200
    assert "Email already exists" in r.get_data(as_text=True)
    assert User.query.filter_by(email="bob@example.com").count() == 1


def test_register_differing_case_email_is_accepted(client):
    _register(client, "case@example.com")
    r = _register(client, "CASE@example.com", follow=False)
    assert r.status_code == 302
    assert User.query.count() == 2


def test_register_password_mismatch_shows_error(client):
    r = _register(client, "mismatch@example.com", confirm="Other123")
    assert "do not match" in r.get_data(as_text=True)
    assert User.query.count() == 0


def test_wrong_password_and_unknown_email_get_same_message(client, make_user, login):
    make_user(email="carl@example.com")

    wrong_pw = login("carl@example.com", "WrongPass1")
    unknown = login("ghost@example.com", "Secret123")

    for r in (wrong_pw, unknown):
        assert r.status_code == 200
        assert "Invalid email or password" in r.get_data(as_text=True)
    assert not _session_user_id(client)


def test_login_redirects_by_role(app, make_user):
    expected = {
        "Admin": "/Home/AdminDashboard",
        "Manager": "/Home/Dashboard",
        "Customer": "/Home/CustomerDashboard",
    }
    for role, path in expected.items():
        email = f"{role.lower()}@example.com"
        make_user(email=email, role=role)
        with app.test_client() as c:
            r = c.post("/Account/Login", data={"email": email, "password": "Secret123"})
            assert r.status_code == 302
            assert r.headers["Location"].endswith(path)


def test_unrecognized_stored_role_lands_on_generic_dashboard(make_user, login, client):
    user = make_user(email="odd@example.com")
    user.role = "Auditor"
    db.session.commit()

    r = login("odd@example.com")
    assert r.headers["Location"].endswith("/Home/Dashboard")
    assert client.get("/Home/Dashboard").status_code == 200


def test_logout_clears_session(client, make_user, login):
    make_user(email="dora@example.com")
    login("dora@example.com")
    assert _session_user_id(client)

    r = client.post("/Account/Logout")
    assert r.status_code == 302
    assert not _session_user_id(client)
    assert client.get("/Home/CustomerDashboard").status_code == 302


def test_idle_session_expires(client, make_user, login):
    make_user(email="idle@example.com")
    login("idle@example.com")
    assert client.get("/Home/CustomerDashboard").status_code == 200

    with client.session_transaction() as sess:
        sess[SESSION_LAST_SEEN] = time.time() - 31 * 60

    r = client.get("/Home/CustomerDashboard")
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/Account/Login")
    assert not _session_user_id(client)


def test_activity_within_window_keeps_session(client, make_user, login):
    make_user(email="busy@example.com")
    login("busy@example.com")
    with client.session_transaction() as sess:
        sess[SESSION_LAST_SEEN] = time.time() - 29 * 60
    assert client.get("/Home/CustomerDashboard").status_code == 200
