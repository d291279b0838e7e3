# backend/tests/conftest.py
import os
import tempfile

# Settings are read at import time, so the environment goes first
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SENDGRID_API_KEY"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="portfolio-uploads-")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import init_db, make_engine
from schemas.achievement import AchievementCreate
from schemas.project import ProjectCreate
from schemas.user import UserCreate
from storage.database import DatabaseStorage
from storage.factory import get_storage
from storage.memory import MemStorage
from utils.mailer import get_mail_client
from utils.notifications import get_notifier
from utils.tokenJWT import create_access_token


class RecordingNotifier:
    def __init__(self):
        self.events = []

    async def broadcast(self, event_type, data):
        self.events.append((event_type, data))


class RecordingMailer:
    def __init__(self):
        self.sent = []

    def send(self, to, subject, html, text=None):
        self.sent.append({"to": to, "subject": subject, "html": html})
        return True


def make_database_storage():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    storage = DatabaseStorage(sessionmaker(bind=engine, autocommit=False, autoflush=False))
    storage.seed_admin()
    return storage, engine


@pytest.fixture(params=["memory", "database"])
def storage(request):
    if request.param == "memory":
        yield MemStorage()
        return
    store, engine = make_database_storage()
    yield store
    engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(storage, notifier, mailer):
    from main import app

    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_mail_client] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin(storage):
    return storage.get_admin_user()


@pytest.fixture
def user(storage):
    return storage.create_user(UserCreate(email="visitor@portfolio.dev", password="secret123", name="Visitor"))


def bearer(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def user_headers(user):
    return bearer(user)


@pytest.fixture
def project(storage):
    return storage.create_project(ProjectCreate(
        title="Analytics Dashboard",
        description="Interactive charts",
        category="Dashboard",
        tags=["Vue.js"],
        is_published=True,
    ))


@pytest.fixture
def achievement(storage):
    return storage.create_achievement(AchievementCreate(
        title="AWS Certification",
        description="Solutions Architect Associate",
        icon="code",
        date=datetime(2023, 10, 20, tzinfo=timezone.utc),
    ))


@pytest.fixture
def headers_for():
    return bearer
