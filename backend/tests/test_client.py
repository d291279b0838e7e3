# backend/tests/test_client.py
import pytest

from client.api import SESSION_EXPIRED_MESSAGE, PortfolioClient, SessionExpiredError
from client.session import AuthSession


@pytest.fixture
def api(client):
    # TestClient is an httpx.Client talking to the app in-process
    return PortfolioClient(http=client)


def test_login_fills_session(api, user):
    api.login("visitor@portfolio.dev", "secret123")
    assert api.session.is_authenticated
    assert not api.session.is_admin
    assert api.me()["id"] == user.id


def test_like_and_comment_through_client(api, user, project):
    api.login("visitor@portfolio.dev", "secret123")
    assert api.toggle_like(project_id=project.id) == {"liked": True, "count": 1}
    api.add_comment("Lovely", project_id=project.id)
    assert [c["content"] for c in api.comments(project_id=project.id)] == ["Lovely"]
    assert api.share_linkedin(project_id=project.id).startswith("https://www.linkedin.com/")


def test_rejected_token_clears_session(api, project):
    api.session = AuthSession(token="expired-or-forged", user={"id": "x", "isAdmin": False})
    with pytest.raises(SessionExpiredError) as exc:
        api.toggle_like(project_id=project.id)
    assert str(exc.value) == SESSION_EXPIRED_MESSAGE
    assert not api.session.is_authenticated
    assert api.session.user is None


def test_non_admin_on_admin_endpoint_is_logged_out(api, user):
    api.login("visitor@portfolio.dev", "secret123")
    with pytest.raises(SessionExpiredError):
        api.admin_stats()
    assert not api.session.is_authenticated


def test_session_persistence(tmp_path):
    path = tmp_path / "session.json"
    session = AuthSession()
    session.login({"token": "abc", "user": {"id": "1", "isAdmin": True}})
    session.save(path)

    restored = AuthSession.load(path)
    assert restored.token == "abc"
    assert restored.is_admin
    assert restored.auth_headers() == {"Authorization": "Bearer abc"}

    restored.logout()
    restored.save(path)
    assert not path.exists()
    assert not AuthSession.load(path).is_authenticated


def test_unreadable_session_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert AuthSession.load(path).token is None
