# backend/storage/base.py
"""Storage contract shared by the in-memory and the SQL backends.

Routes only ever talk to a :class:`Storage`; which implementation sits behind
it is picked once at startup (see ``storage.factory``). Both backends must
behave identically from the caller's point of view, the shared test-suite in
``tests/test_storage.py`` runs against each of them.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models.like import PROJECT, ACHIEVEMENT
from schemas.achievement import AchievementCreate, AchievementOut
from schemas.comment import CommentCreate, CommentOut, CommentWithUser
from schemas.like import LikeOut, ToggleResult
from schemas.project import ProjectCreate, ProjectOut
from schemas.tool import ToolCreate, ToolOut
from schemas.user import UserCreate, UserRecord

UNKNOWN_USER_NAME = "Unknown User"

# Fields the store owns; partial updates never overwrite them
PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


class StorageError(Exception):
    """Base class for errors raised by a storage backend."""


class NotFoundError(StorageError):
    pass


class ConflictError(StorageError):
    pass


class InvalidTargetError(StorageError):
    pass


@dataclass(frozen=True)
class LikeTarget:
    """Normalized reference to exactly one project or achievement."""

    target_type: str
    target_id: str

    @classmethod
    def from_refs(cls, project_id: Optional[str] = None, achievement_id: Optional[str] = None) -> "LikeTarget":
        # "" and None both mean "not given"
        project_id = project_id or None
        achievement_id = achievement_id or None
        if project_id and achievement_id:
            raise InvalidTargetError("Only one of projectId or achievementId may be given")
        if project_id:
            return cls(PROJECT, project_id)
        if achievement_id:
            return cls(ACHIEVEMENT, achievement_id)
        raise InvalidTargetError("One of projectId or achievementId is required")

    @property
    def project_id(self) -> Optional[str]:
        return self.target_id if self.target_type == PROJECT else None

    @property
    def achievement_id(self) -> Optional[str]:
        return self.target_id if self.target_type == ACHIEVEMENT else None


def clean_updates(updates: Dict[str, Any], allowed) -> Dict[str, Any]:
    """Drop store-owned and unknown keys from a partial update."""
    return {
        key: value
        for key, value in updates.items()
        if key in allowed and key not in PROTECTED_FIELDS
    }


class Storage(ABC):
    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_admin_user(self) -> Optional[UserRecord]: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserRecord:
        """Hash the password and store a non-admin user.

        Raises ConflictError when the email is already taken.
        """

    @abstractmethod
    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserRecord]: ...

    @abstractmethod
    def set_user_password(self, user_id: str, password: str) -> bool: ...

    @abstractmethod
    def seed_admin(self) -> UserRecord:
        """Create the configured administrator unless its email already exists."""

    # Projects
    @abstractmethod
    def get_projects(
        self,
        published: Optional[bool] = None,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ProjectOut]: ...

    @abstractmethod
    def get_project(self, project_id: str) -> Optional[ProjectOut]: ...

    @abstractmethod
    def create_project(self, data: ProjectCreate) -> ProjectOut: ...

    @abstractmethod
    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Optional[ProjectOut]: ...

    @abstractmethod
    def delete_project(self, project_id: str) -> bool: ...

    # Achievements
    @abstractmethod
    def get_achievements(
        self,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[AchievementOut]: ...

    @abstractmethod
    def get_achievement(self, achievement_id: str) -> Optional[AchievementOut]: ...

    @abstractmethod
    def create_achievement(self, data: AchievementCreate) -> AchievementOut: ...

    @abstractmethod
    def update_achievement(self, achievement_id: str, updates: Dict[str, Any]) -> Optional[AchievementOut]: ...

    @abstractmethod
    def delete_achievement(self, achievement_id: str) -> bool: ...

    # Comments
    @abstractmethod
    def get_comments(
        self,
        project_id: Optional[str] = None,
        achievement_id: Optional[str] = None,
    ) -> List[CommentWithUser]: ...

    @abstractmethod
    def create_comment(self, user_id: str, data: CommentCreate) -> CommentOut:
        """Store a comment on exactly one existing target.

        Raises InvalidTargetError for zero or two targets and NotFoundError
        when the target does not exist.
        """

    @abstractmethod
    def delete_comment(self, comment_id: str) -> bool: ...

    # Likes
    @abstractmethod
    def toggle_like(self, user_id: str, target: LikeTarget) -> ToggleResult:
        """Flip the (user, target) like and keep the target counter in step.

        The lookup and both writes happen as one unit; ``count`` is read back
        from the stored counter afterwards. Raises NotFoundError when the
        target does not exist.
        """

    @abstractmethod
    def get_user_likes(self, user_id: str) -> List[LikeOut]: ...

    # Tools
    @abstractmethod
    def get_tools(
        self,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ToolOut]: ...

    @abstractmethod
    def get_tool(self, tool_id: str) -> Optional[ToolOut]: ...

    @abstractmethod
    def create_tool(self, data: ToolCreate) -> ToolOut: ...

    @abstractmethod
    def update_tool(self, tool_id: str, updates: Dict[str, Any]) -> Optional[ToolOut]: ...

    @abstractmethod
    def delete_tool(self, tool_id: str) -> bool: ...

    def target_exists(self, target: LikeTarget) -> bool:
        if target.target_type == PROJECT:
            return self.get_project(target.target_id) is not None
        return self.get_achievement(target.target_id) is not None
