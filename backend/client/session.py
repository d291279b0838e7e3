# backend/client/session.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class AuthSession:
    """Bearer token plus the user it was issued for.

    Lives in an explicit object handed to the API client instead of global
    state, and can be persisted to a JSON file between runs.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get("isAdmin"))

    def login(self, response: Dict[str, Any]):
        # Body of /api/auth/login and /api/auth/register: {"token": ..., "user": {...}}
        self.token = response["token"]
        self.user = response["user"]

    def logout(self):
        self.token = None
        self.user = None

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def save(self, path: Union[str, Path]):
        path = Path(path)
        if not self.is_authenticated:
            path.unlink(missing_ok=True)
            return
        path.write_text(json.dumps({"token": self.token, "user": self.user}), encoding="utf-8")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "AuthSession":
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable session file %s", path)
            return cls()
        return cls(token=data.get("token"), user=data.get("user"))
