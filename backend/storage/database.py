# backend/storage/database.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from database import SessionLocal, utcnow
from models.achievement import Achievement
from models.comment import Comment
from models.like import Like, PROJECT
from models.project import Project
from models.tool import Tool
from models.users import User
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
from storage.seed import ADMIN_PROFILE, admin_credentials
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)

USER_FIELDS = set(UserRecord.model_fields) - {"email", "password_hash", "is_admin"}
PROJECT_FIELDS = set(ProjectOut.model_fields)
ACHIEVEMENT_FIELDS = set(AchievementOut.model_fields)
TOOL_FIELDS = set(ToolOut.model_fields)


def _apply(row, changes: Dict[str, Any]):
    for key, value in changes.items():
        setattr(row, key, value)


def _page(query, limit: Optional[int], offset: Optional[int]):
    if offset:
        query = query.offset(offset)
    if limit:
        query = query.limit(limit)
    return query


class DatabaseStorage(Storage):
    """Relational backend on SQLAlchemy.

    Reads use a short-lived session, writes run inside ``session_factory.begin()``
    so every public method is one transaction. Rows are converted to schemas
    before the session closes.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def _read(self) -> Session:
        return self.session_factory()

    def _write(self):
        return self.session_factory.begin()

    # ---- USERS ----
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._read() as db:
            user = db.query(User).filter(User.id == user_id).first()
            return UserRecord.model_validate(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        normalized = (email or "").strip().lower()
        with self._read() as db:
            user = db.query(User).filter(func.lower(User.email) == normalized).first()
            return UserRecord.model_validate(user) if user else None

    def get_admin_user(self) -> Optional[UserRecord]:
        with self._read() as db:
            user = db.query(User).filter(User.is_admin.is_(True)).first()
            return UserRecord.model_validate(user) if user else None

    def create_user(self, data: UserCreate) -> UserRecord:
        email = data.email.strip().lower()
        try:
            with self._write() as db:
                if db.query(User).filter(func.lower(User.email) == email).first():
                    raise ConflictError("User already exists")
                user = User(
                    email=email,
                    password_hash=get_password_hash(data.password),
                    name=data.name,
                    is_admin=False,
                )
                db.add(user)
                db.flush()
                return UserRecord.model_validate(user)
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            raise ConflictError("User already exists")

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[UserRecord]:
        with self._write() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if not user:
                return None
            _apply(user, clean_updates(updates, USER_FIELDS))
            db.flush()
            return UserRecord.model_validate(user)

    def set_user_password(self, user_id: str, password: str) -> bool:
        with self._write() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if not user:
                return False
            user.password_hash = get_password_hash(password)
            return True

    def seed_admin(self) -> UserRecord:
        email, password, name = admin_credentials()
        existing = self.get_user_by_email(email)
        if existing:
            return existing
        with self._write() as db:
            admin = User(
                email=email,
                password_hash=get_password_hash(password),
                name=name,
                is_admin=True,
                **ADMIN_PROFILE,
            )
            db.add(admin)
            db.flush()
            record = UserRecord.model_validate(admin)
        logger.info("Admin user initialized in database: %s", record.email)
        return record

    # ---- PROJECTS ----
    def get_projects(self, published=None, featured=None, limit=None, offset=None) -> List[ProjectOut]:
        with self._read() as db:
            query = db.query(Project)
            if published is not None:
                query = query.filter(Project.is_published.is_(published))
            if featured is not None:
                query = query.filter(Project.is_featured.is_(featured))
            query = _page(query.order_by(Project.created_at.desc()), limit, offset)
            return [ProjectOut.model_validate(p) for p in query.all()]

    def get_project(self, project_id: str) -> Optional[ProjectOut]:
        with self._read() as db:
            project = db.query(Project).filter(Project.id == project_id).first()
            return ProjectOut.model_validate(project) if project else None

    def create_project(self, data: ProjectCreate) -> ProjectOut:
        with self._write() as db:
            project = Project(likes=0, **data.model_dump())
            db.add(project)
            db.flush()
            return ProjectOut.model_validate(project)

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Optional[ProjectOut]:
        with self._write() as db:
            project = db.query(Project).filter(Project.id == project_id).first()
            if not project:
                return None
            _apply(project, clean_updates(updates, PROJECT_FIELDS))
            project.updated_at = utcnow()
            db.flush()
            return ProjectOut.model_validate(project)

    def delete_project(self, project_id: str) -> bool:
        with self._write() as db:
            project = db.query(Project).filter(Project.id == project_id).first()
            if not project:
                return False
            db.query(Like).filter(Like.project_id == project_id).delete(synchronize_session=False)
            db.query(Comment).filter(Comment.project_id == project_id).delete(synchronize_session=False)
            db.delete(project)
            return True

    # ---- ACHIEVEMENTS ----
    def get_achievements(self, featured=None, limit=None, offset=None) -> List[AchievementOut]:
        with self._read() as db:
            query = db.query(Achievement)
            if featured is not None:
                query = query.filter(Achievement.is_featured.is_(featured))
            query = _page(query.order_by(Achievement.created_at.desc()), limit, offset)
            return [AchievementOut.model_validate(a) for a in query.all()]

    def get_achievement(self, achievement_id: str) -> Optional[AchievementOut]:
        with self._read() as db:
            achievement = db.query(Achievement).filter(Achievement.id == achievement_id).first()
            return AchievementOut.model_validate(achievement) if achievement else None

    def create_achievement(self, data: AchievementCreate) -> AchievementOut:
        with self._write() as db:
            achievement = Achievement(likes=0, **data.model_dump())
            db.add(achievement)
            db.flush()
            return AchievementOut.model_validate(achievement)

    def update_achievement(self, achievement_id: str, updates: Dict[str, Any]) -> Optional[AchievementOut]:
        with self._write() as db:
            achievement = db.query(Achievement).filter(Achievement.id == achievement_id).first()
            if not achievement:
                return None
            _apply(achievement, clean_updates(updates, ACHIEVEMENT_FIELDS))
            db.flush()
            return AchievementOut.model_validate(achievement)

    def delete_achievement(self, achievement_id: str) -> bool:
        with self._write() as db:
            achievement = db.query(Achievement).filter(Achievement.id == achievement_id).first()
            if not achievement:
                return False
            db.query(Like).filter(Like.achievement_id == achievement_id).delete(synchronize_session=False)
            db.query(Comment).filter(Comment.achievement_id == achievement_id).delete(synchronize_session=False)
            db.delete(achievement)
            return True

    # ---- COMMENTS ----
    def get_comments(self, project_id=None, achievement_id=None) -> List[CommentWithUser]:
        with self._read() as db:
            query = db.query(Comment)
            if project_id:
                query = query.filter(Comment.project_id == project_id)
            if achievement_id:
                query = query.filter(Comment.achievement_id == achievement_id)

            result = []
            for comment in query.order_by(Comment.created_at.desc()).all():
                if comment.user:
                    author = CommentAuthor.model_validate(comment.user)
                else:
                    author = CommentAuthor(id=comment.user_id, name=UNKNOWN_USER_NAME, avatar=None)
                out = CommentOut.model_validate(comment)
                result.append(CommentWithUser(**out.model_dump(), user=author))
            return result

    def create_comment(self, user_id: str, data: CommentCreate) -> CommentOut:
        target = LikeTarget.from_refs(data.project_id, data.achievement_id)
        model = self._target_model(target)
        with self._write() as db:
            self._require_user(db, user_id)
            if not db.query(model.id).filter(model.id == target.target_id).first():
                raise NotFoundError(f"{target.target_type.capitalize()} not found")
            comment = Comment(
                content=data.content,
                user_id=user_id,
                project_id=target.project_id,
                achievement_id=target.achievement_id,
            )
            db.add(comment)
            db.flush()
            return CommentOut.model_validate(comment)

    def delete_comment(self, comment_id: str) -> bool:
        with self._write() as db:
            deleted = db.query(Comment).filter(Comment.id == comment_id).delete(synchronize_session=False)
            return deleted > 0

    # ---- LIKES ----
    @staticmethod
    def _target_model(target: LikeTarget):
        return Project if target.target_type == PROJECT else Achievement

    @staticmethod
    def _require_user(db: Session, user_id: str):
        if not db.query(User.id).filter(User.id == user_id).first():
            raise NotFoundError("User not found")

    def _find_like(self, db: Session, user_id: str, target: LikeTarget) -> Optional[Like]:
        return (
            db.query(Like)
            .filter(
                Like.user_id == user_id,
                Like.target_type == target.target_type,
                Like.target_id == target.target_id,
            )
            .first()
        )

    def toggle_like(self, user_id: str, target: LikeTarget) -> ToggleResult:
        model = self._target_model(target)
        with self._write() as db:
            self._require_user(db, user_id)
            # Locking the target row serializes concurrent toggles on it
            locked = (
                db.query(model.id)
                .filter(model.id == target.target_id)
                .with_for_update()
                .first()
            )
            if locked is None:
                raise NotFoundError(f"{target.target_type.capitalize()} not found")

            existing = self._find_like(db, user_id, target)

            counter = db.query(model).filter(model.id == target.target_id)
            if existing:
                db.delete(existing)
                db.flush()
                counter.update(
                    {model.likes: case((model.likes > 0, model.likes - 1), else_=0)},
                    synchronize_session=False,
                )
                liked = False
            else:
                try:
                    with db.begin_nested():
                        db.add(Like(
                            user_id=user_id,
                            project_id=target.project_id,
                            achievement_id=target.achievement_id,
                            target_type=target.target_type,
                            target_id=target.target_id,
                        ))
                except IntegrityError:
                    # Only a row committed by a concurrent toggle counts as "already liked";
                    # that toggle has already moved the counter
                    if self._find_like(db, user_id, target) is None:
                        raise
                    logger.info("Concurrent like for %s %s by %s", target.target_type, target.target_id, user_id)
                else:
                    counter.update({model.likes: model.likes + 1}, synchronize_session=False)
                liked = True

            count = db.query(model.likes).filter(model.id == target.target_id).scalar()
        return ToggleResult(liked=liked, count=count or 0)

    def get_user_likes(self, user_id: str) -> List[LikeOut]:
        with self._read() as db:
            likes = db.query(Like).filter(Like.user_id == user_id).order_by(Like.created_at.asc()).all()
            return [LikeOut.model_validate(like) for like in likes]

    # ---- TOOLS ----
    def get_tools(self, featured=None, limit=None, offset=None) -> List[ToolOut]:
        with self._read() as db:
            query = db.query(Tool)
            if featured is not None:
                query = query.filter(Tool.is_featured.is_(featured))
            query = _page(query.order_by(Tool.order.asc(), Tool.name.asc()), limit, offset)
            return [ToolOut.model_validate(t) for t in query.all()]

    def get_tool(self, tool_id: str) -> Optional[ToolOut]:
        with self._read() as db:
            tool = db.query(Tool).filter(Tool.id == tool_id).first()
            return ToolOut.model_validate(tool) if tool else None

    def create_tool(self, data: ToolCreate) -> ToolOut:
        with self._write() as db:
            tool = Tool(**data.model_dump())
            db.add(tool)
            db.flush()
            return ToolOut.model_validate(tool)

    def update_tool(self, tool_id: str, updates: Dict[str, Any]) -> Optional[ToolOut]:
        with self._write() as db:
            tool = db.query(Tool).filter(Tool.id == tool_id).first()
            if not tool:
                return None
            _apply(tool, clean_updates(updates, TOOL_FIELDS))
            db.flush()
            return ToolOut.model_validate(tool)

    def delete_tool(self, tool_id: str) -> bool:
        with self._write() as db:
            deleted = db.query(Tool).filter(Tool.id == tool_id).delete(synchronize_session=False)
            return deleted > 0
