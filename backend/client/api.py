# backend/client/api.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from client.session import AuthSession

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Your session has expired, please log in again"


class SessionExpiredError(Exception):
    def __init__(self, message: str = SESSION_EXPIRED_MESSAGE):
        super().__init__(message)


class PortfolioClient:
    """Thin synchronous client for the portfolio API.

    A 401 or 403 on an authenticated call clears the session and raises
    SessionExpiredError, so callers can send the user back to the login form.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        session: Optional[AuthSession] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.session = session or AuthSession()
        self.http = http or httpx.Client(base_url=base_url, timeout=10.0)

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ---- transport ----
    def _request(self, method: str, url: str, auth: bool = False, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if auth:
            headers.update(self.session.auth_headers())
        response = self.http.request(method, url, headers=headers, **kwargs)

        if auth and response.status_code in (401, 403):
            logger.info("Session rejected with %s on %s %s", response.status_code, method, url)
            self.session.logout()
            raise SessionExpiredError()

        response.raise_for_status()
        return response.json()

    # ---- auth ----
    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.session.login(data)
        return data["user"]

    def register(self, email: str, password: str, name: str) -> Dict[str, Any]:
        data = self._request(
            "POST", "/api/auth/register", json={"email": email, "password": password, "name": name}
        )
        self.session.login(data)
        return data["user"]

    def logout(self):
        self.session.logout()

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/api/auth/me", auth=True)

    # ---- content ----
    def list_projects(self, **filters) -> List[Dict[str, Any]]:
        params = {k: v for k, v in filters.items() if v is not None}
        return self._request("GET", "/api/projects", params=params)

    def get_project(self, project_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/projects/{project_id}")

    def list_achievements(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/achievements")

    def list_tools(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/tools")

    def get_profile(self) -> Dict[str, Any]:
        return self._request("GET", "/api/profile")

    # ---- engagement ----
    def toggle_like(self, project_id: Optional[str] = None, achievement_id: Optional[str] = None) -> Dict[str, Any]:
        body = {"projectId": project_id, "achievementId": achievement_id}
        return self._request("POST", "/api/likes/toggle", auth=True, json=body)

    def my_likes(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/likes/user", auth=True)

    def comments(self, project_id: Optional[str] = None, achievement_id: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {k: v for k, v in {"projectId": project_id, "achievementId": achievement_id}.items() if v}
        return self._request("GET", "/api/comments", params=params)

    def add_comment(
        self, content: str, project_id: Optional[str] = None, achievement_id: Optional[str] = None
    ) -> Dict[str, Any]:
        body = {"content": content, "projectId": project_id, "achievementId": achievement_id}
        return self._request("POST", "/api/comments", auth=True, json=body)

    def share_linkedin(self, project_id: Optional[str] = None, achievement_id: Optional[str] = None) -> str:
        body = {"projectId": project_id, "achievementId": achievement_id}
        return self._request("POST", "/api/share/linkedin", auth=True, json=body)["shareUrl"]

    # ---- admin ----
    def admin_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/stats", auth=True)
