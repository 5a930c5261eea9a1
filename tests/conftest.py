from __future__ import annotations

import os
import tempfile

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Configure the app before anything imports config.get_settings().
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ASSET_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = os.path.join(tempfile.mkdtemp(prefix="places-uploads-"), "images")
os.environ.pop("GOOGLE_API_KEY", None)

from database import get_session, init_db  # noqa: E402
from dependencies import get_asset_store, get_geocoder  # noqa: E402
from models import User  # noqa: E402
from services import Coordinates, LocalAssetStore  # noqa: E402
from services.exceptions import GeocodeError  # noqa: E402


class FakeGeocoder:
    """Resolves every address to one point, except the ones listed as unknown."""

    def __init__(self, unknown=("nowhere",)):
        self.unknown = set(unknown)
        self.calls = []

    def resolve(self, address):
        self.calls.append(address)
        if address in self.unknown:
            raise GeocodeError()
        return Coordinates(lat=40.7484405, lng=-73.9878584)


class RecordingScheduler:
    """Stands in for BackgroundTasks.add_task and keeps what was scheduled."""

    def __init__(self):
        self.tasks = []

    def __call__(self, func, *args):
        self.tasks.append((func, args))

    def run_all(self):
        for func, args in self.tasks:
            func(*args)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
    try:
        yield TestingSession
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def geocoder():
    return FakeGeocoder()


@pytest.fixture()
def asset_store(tmp_path):
    return LocalAssetStore(str(tmp_path / "images"))


@pytest.fixture()
def scheduler():
    return RecordingScheduler()


@pytest.fixture()
def make_user(db_session):
    def _make_user(email="a@x.com", name="alice", password="x"):
        user = User(email=email, name=name, password=password)
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def client(session_factory, geocoder, asset_store):
    from fastapi.testclient import TestClient

    from main import app

    def _get_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_asset_store] = lambda: asset_store
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
