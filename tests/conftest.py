"""Shared fixtures: in-memory SQLite, a real session codec, a tokeninfo stub and a mocked stream provider."""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id.apps.googleusercontent.com")

import uuid  # noqa: E402
from datetime import datetime  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402, F401 - register tables
from app.auth import SessionTokenCodec, get_session_codec  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.models.stream import Stream, StreamStatus  # noqa: E402
from app.models.user import User  # noqa: E402
from app.models.video import Video  # noqa: E402
from app.services.google_auth import GoogleIdentityVerifier, get_identity_verifier  # noqa: E402
from app.services.stream_provider import CloudflareStreamClient, get_stream_provider  # noqa: E402

CLIENT_ID = "test-client-id.apps.googleusercontent.com"
TEST_SECRET = "test-secret-key"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def codec() -> SessionTokenCodec:
    return SessionTokenCodec(TEST_SECRET)


@pytest.fixture
def tokeninfo() -> dict:
    """id_token -> (status, json body) served by the fake Google tokeninfo endpoint."""
    return {}


@pytest.fixture
def identity_verifier(tokeninfo: dict) -> GoogleIdentityVerifier:
    def handler(request: httpx.Request) -> httpx.Response:
        token = request.url.params.get("id_token")
        status_code, body = tokeninfo.get(token, (400, {"error": "invalid_token"}))
        return httpx.Response(status_code, json=body)

    return GoogleIdentityVerifier(CLIENT_ID, transport=httpx.MockTransport(handler))


@pytest.fixture
def stream_provider() -> AsyncMock:
    return AsyncMock(spec=CloudflareStreamClient)


@pytest.fixture
def client(session_factory, codec, identity_verifier, stream_provider):
    from app.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_codec] = lambda: codec
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    app.dependency_overrides[get_stream_provider] = lambda: stream_provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make(email: str = "owner@example.com", name: str | None = "Owner") -> User:
        user = User(id=str(uuid.uuid4()), email=email, name=name, created_at=datetime.utcnow())
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_video(db_session):
    def _make(owner: User, visibility: str = "private", title: str = "Clip") -> Video:
        video = Video(
            id=str(uuid.uuid4()),
            title=title,
            video_key=f"{uuid.uuid4()}-clip.mp4",
            visibility=visibility,
            user_id=owner.id,
            created_at=datetime.utcnow(),
        )
        db_session.add(video)
        db_session.commit()
        db_session.refresh(video)
        return video

    return _make


@pytest.fixture
def make_stream(db_session):
    def _make(owner: User, status: str = StreamStatus.IDLE.value, title: str = "Launch") -> Stream:
        stream = Stream(
            id=str(uuid.uuid4()),
            title=title,
            description="",
            cf_stream_id=uuid.uuid4().hex,
            rtmp_url="rtmps://live.cloudflare.com:443/live/",
            stream_key="secret-stream-key",
            status=status,
            user_id=owner.id,
            created_at=datetime.utcnow(),
        )
        db_session.add(stream)
        db_session.commit()
        db_session.refresh(stream)
        return stream

    return _make


@pytest.fixture
def auth_headers(codec):
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {codec.issue(user.id, user.email)}"}

    return _headers
