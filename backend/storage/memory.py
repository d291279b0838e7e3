# backend/storage/memory.py
import logging
import threading
import uuid
from typing import Any, Dict, List, Optional

from database import utcnow
from models.like import PROJECT
from schemas.achievement import AchievementCreate, AchievementOut
from schemas.comment import CommentAuthor, CommentCreate, CommentOut, CommentWithUser
from schemas.like import LikeOut, ToggleResult
from schemas.project import ProjectCreate, ProjectOut
from schemas.tool import ToolCreate, ToolOut
from schemas.user import UserCreate, UserRecord
from storage.base import (
    UNKNOWN_USER_NAME,
    ConflictError,
    LikeTarget,
    NotFoundError,
    Storage,
    clean_updates,
)
from storage.seed import ADMIN_PROFILE, admin_credentials, seed_sample_content
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _newest_first(records):
    # Pre-reversing keeps later inserts first when timestamps tie
    return sorted(reversed(list(records)), key=lambda r: r.created_at, reverse=True)


def _page(records, limit: Optional[int], offset: Optional[int]):
    if offset:
        records = records[offset:]
    if limit:
        records = records[:limit]
    return records


class MemStorage(Storage):
    """Keeps every entity in process-local dicts. Content is lost on restart.

    A single re-entrant lock serializes operations, which is what makes the
    like toggle atomic here.
    """

    def __init__(self, seed_samples: bool = False):
        self._lock = threading.RLock()
        self.users: Dict[str, UserRecord] = {}
        self.projects: Dict[str, ProjectOut] = {}
        self.achievements: Dict[str, AchievementOut] = {}
        self.comments: Dict[str, CommentOut] = {}
        self.likes: Dict[str, LikeOut] = {}
        self.tools: Dict[str, ToolOut] = {}
        # (user_id, target_type, target_id) -> like id
        self._like_index: Dict[tuple, str] = {}

        self.seed_admin()
        if seed_samples:
            seed_sample_content(self)

    # ---- USERS ----
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        normalized = (email or "").strip().lower()
        with self._lock:
            for user in self.users.values():
                if user.email == normalized:
                    return user.model_copy(deep=True)
        return None

    def get_admin_user(self) -> Optional[UserRecord]:
        with self._lock:
            for user in self.users.values():
                if user.is_admin:
                    return user.model_copy(deep=True)
        return None

    def _insert_user(self, email: str, password: str, name: str, is_admin: bool, **profile) -> UserRecord:
        user = UserRecord(
            id=_new_id(),
            email=email,
            password_hash=get_password_hash(password),
            name=name,
            is_admin=is_admin,
            created_at=utcnow(),
            **profile,
        )
        self.users[user.id] = user
        return user.model_copy(deep=True)

    def create_user(self, data: UserCreate) -> UserRecord:
        email = data.email.strip().lower()
        with self._lock:
            if self.get_user_by_email(email):
                raise ConflictError("User already exists")
            return self._insert_user(email, data.password, data.name, is_admin=False)

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserRecord]:
        with self._lock:
            user = self.users.get(user_id)
            if not user:
                return None
            # email and password have their own flows
            allowed = set(UserRecord.model_fields) - {"email", "password_hash", "is_admin"}
            updated = user.model_copy(update=clean_updates(updates, allowed))
            self.users[user_id] = updated
            return updated.model_copy(deep=True)

    def set_user_password(self, user_id: str, password: str) -> bool:
        with self._lock:
            user = self.users.get(user_id)
            if not user:
                return False
            self.users[user_id] = user.model_copy(update={"password_hash": get_password_hash(password)})
            return True

    def seed_admin(self) -> UserRecord:
        email, password, name = admin_credentials()
        with self._lock:
            existing = self.get_user_by_email(email)
            if existing:
                return existing
            admin = self._insert_user(email, password, name, is_admin=True, **ADMIN_PROFILE)
        logger.info("Admin user initialized: %s", admin.email)
        return admin

    def _require_user(self, user_id: str):
        if user_id not in self.users:
            raise NotFoundError("User not found")

    # ---- PROJECTS ----
    def get_projects(self, published=None, featured=None, limit=None, offset=None) -> List[ProjectOut]:
        with self._lock:
            projects = list(self.projects.values())
            if published is not None:
                projects = [p for p in projects if p.is_published == published]
            if featured is not None:
                projects = [p for p in projects if p.is_featured == featured]
            projects = _page(_newest_first(projects), limit, offset)
            return [p.model_copy(deep=True) for p in projects]

    def get_project(self, project_id: str) -> Optional[ProjectOut]:
        project = self.projects.get(project_id)
        return project.model_copy(deep=True) if project else None

    def create_project(self, data: ProjectCreate) -> ProjectOut:
        now = utcnow()
        project = ProjectOut(id=_new_id(), likes=0, created_at=now, updated_at=now, **data.model_dump())
        with self._lock:
            self.projects[project.id] = project
        return project.model_copy(deep=True)

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Optional[ProjectOut]:
        with self._lock:
            project = self.projects.get(project_id)
            if not project:
                return None
            changes = clean_updates(updates, ProjectOut.model_fields)
            changes["updated_at"] = utcnow()
            updated = project.model_copy(update=changes)
            self.projects[project_id] = updated
            return updated.model_copy(deep=True)

    def delete_project(self, project_id: str) -> bool:
        with self._lock:
            if self.projects.pop(project_id, None) is None:
                return False
            self._drop_target_rows(LikeTarget.from_refs(project_id=project_id))
            return True

    # ---- ACHIEVEMENTS ----
    def get_achievements(self, featured=None, limit=None, offset=None) -> List[AchievementOut]:
        with self._lock:
            achievements = list(self.achievements.values())
            if featured is not None:
                achievements = [a for a in achievements if a.is_featured == featured]
            achievements = _page(_newest_first(achievements), limit, offset)
            return [a.model_copy(deep=True) for a in achievements]

    def get_achievement(self, achievement_id: str) -> Optional[AchievementOut]:
        achievement = self.achievements.get(achievement_id)
        return achievement.model_copy(deep=True) if achievement else None

    def create_achievement(self, data: AchievementCreate) -> AchievementOut:
        achievement = AchievementOut(id=_new_id(), likes=0, created_at=utcnow(), **data.model_dump())
        with self._lock:
            self.achievements[achievement.id] = achievement
        return achievement.model_copy(deep=True)

    def update_achievement(self, achievement_id: str, updates: Dict[str, Any]) -> Optional[AchievementOut]:
        with self._lock:
            achievement = self.achievements.get(achievement_id)
            if not achievement:
                return None
            updated = achievement.model_copy(update=clean_updates(updates, AchievementOut.model_fields))
            self.achievements[achievement_id] = updated
            return updated.model_copy(deep=True)

    def delete_achievement(self, achievement_id: str) -> bool:
        with self._lock:
            if self.achievements.pop(achievement_id, None) is None:
                return False
            self._drop_target_rows(LikeTarget.from_refs(achievement_id=achievement_id))
            return True

    def _drop_target_rows(self, target: LikeTarget):
        # Comments and likes go away together with their target
        for comment_id in [
            c.id for c in self.comments.values()
            if c.project_id == target.project_id and c.achievement_id == target.achievement_id
        ]:
            del self.comments[comment_id]
        for key in [k for k in self._like_index if k[1:] == (target.target_type, target.target_id)]:
            del self.likes[self._like_index.pop(key)]

    # ---- COMMENTS ----
    def get_comments(self, project_id=None, achievement_id=None) -> List[CommentWithUser]:
        with self._lock:
            comments = list(self.comments.values())
            if project_id:
                comments = [c for c in comments if c.project_id == project_id]
            if achievement_id:
                comments = [c for c in comments if c.achievement_id == achievement_id]

            result = []
            for comment in _newest_first(comments):
                user = self.users.get(comment.user_id)
                if user:
                    author = CommentAuthor(id=user.id, name=user.name, avatar=user.avatar)
                else:
                    author = CommentAuthor(id=comment.user_id, name=UNKNOWN_USER_NAME, avatar=None)
                result.append(CommentWithUser(**comment.model_dump(), user=author))
            return result

    def create_comment(self, user_id: str, data: CommentCreate) -> CommentOut:
        target = LikeTarget.from_refs(data.project_id, data.achievement_id)
        with self._lock:
            self._require_user(user_id)
            if not self.target_exists(target):
                raise NotFoundError(f"{target.target_type.capitalize()} not found")
            comment = CommentOut(
                id=_new_id(),
                content=data.content,
                user_id=user_id,
                project_id=target.project_id,
                achievement_id=target.achievement_id,
                created_at=utcnow(),
            )
            self.comments[comment.id] = comment
        return comment.model_copy(deep=True)

    def delete_comment(self, comment_id: str) -> bool:
        with self._lock:
            return self.comments.pop(comment_id, None) is not None

    # ---- LIKES ----
    def _counter_holder(self, target: LikeTarget):
        return self.projects if target.target_type == PROJECT else self.achievements

    def toggle_like(self, user_id: str, target: LikeTarget) -> ToggleResult:
        with self._lock:
            self._require_user(user_id)
            holder = self._counter_holder(target)
            record = holder.get(target.target_id)
            if record is None:
                raise NotFoundError(f"{target.target_type.capitalize()} not found")

            key = (user_id, target.target_type, target.target_id)
            existing_id = self._like_index.get(key)
            if existing_id:
                # Unlike
                del self._like_index[key]
                self.likes.pop(existing_id, None)
                holder[target.target_id] = record.model_copy(update={"likes": max(0, record.likes - 1)})
                liked = False
            else:
                like = LikeOut(
                    id=_new_id(),
                    user_id=user_id,
                    project_id=target.project_id,
                    achievement_id=target.achievement_id,
                    created_at=utcnow(),
                )
                self.likes[like.id] = like
                self._like_index[key] = like.id
                holder[target.target_id] = record.model_copy(update={"likes": record.likes + 1})
                liked = True

            return ToggleResult(liked=liked, count=holder[target.target_id].likes)

    def get_user_likes(self, user_id: str) -> List[LikeOut]:
        with self._lock:
            return [like.model_copy() for like in self.likes.values() if like.user_id == user_id]

    # ---- TOOLS ----
    def get_tools(self, featured=None, limit=None, offset=None) -> List[ToolOut]:
        with self._lock:
            tools = list(self.tools.values())
            if featured is not None:
                tools = [t for t in tools if t.is_featured == featured]
            tools.sort(key=lambda t: (t.order, t.name))
            return [t.model_copy(deep=True) for t in _page(tools, limit, offset)]

    def get_tool(self, tool_id: str) -> Optional[ToolOut]:
        tool = self.tools.get(tool_id)
        return tool.model_copy(deep=True) if tool else None

    def create_tool(self, data: ToolCreate) -> ToolOut:
        tool = ToolOut(id=_new_id(), created_at=utcnow(), **data.model_dump())
        with self._lock:
            self.tools[tool.id] = tool
        return tool.model_copy(deep=True)

    def update_tool(self, tool_id: str, updates: Dict[str, Any]) -> Optional[ToolOut]:
        with self._lock:
            tool = self.tools.get(tool_id)
            if not tool:
                return None
            updated = tool.model_copy(update=clean_updates(updates, ToolOut.model_fields))
            self.tools[tool_id] = updated
            return updated.model_copy(deep=True)

    def delete_tool(self, tool_id: str) -> bool:
        with self._lock:
            return self.tools.pop(tool_id, None) is not None
