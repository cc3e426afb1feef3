import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from core.db import Base, get_db, enable_sqlite_foreign_keys
from core import config as core_config
from models.store import Store
from services import identity as identity_service
from services.identity import IdentityError


OWNER_ID = "owner-0001"
OTHER_ID = "other-0002"


@pytest.fixture(scope="session", autouse=True)
def test_settings():
    core_config.settings.SUPABASE_JWT_SECRET = "test-jwt-secret"
    core_config.settings.JWT_ALG = "HS256"
    core_config.settings.JWT_AUDIENCE = "authenticated"
    core_config.settings.INVITE_CODE_START = "INV"
    core_config.settings.TESTING = True
    yield


def make_token(sub: str, email: str | None = None, minutes: int = 60, secret: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "email": email or f"{sub}@example.com",
        "role": "authenticated",
        "aud": "authenticated",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
    }
    return jwt.encode(payload, secret or core_config.settings.SUPABASE_JWT_SECRET, algorithm="HS256")


class FakeIdentityProvider:
    """In-memory stand-in for the identity provider's REST API."""

    def __init__(self):
        self.users = {}
        self.refresh_tokens = {}

    def _session(self, user):
        refresh_token = uuid.uuid4().hex
        self.refresh_tokens[refresh_token] = user["email"]
        return {
            "access_token": make_token(user["id"], user["email"]),
            "refresh_token": refresh_token,
            "token_type": "bearer",
            "expires_in": 3600,
            "user": {"id": user["id"], "email": user["email"], "role": "authenticated"},
        }

    def create_user(self, email, password):
        if email in self.users:
            raise IdentityError("A user with this email address has already been registered", 422)
        user = {"id": str(uuid.uuid4()), "email": email, "password": password, "role": "authenticated"}
        self.users[email] = user
        return {"id": user["id"], "email": email, "role": "authenticated"}

    def sign_in_with_password(self, email, password):
        user = self.users.get(email)
        if not user or user["password"] != password:
            raise IdentityError("Invalid login credentials", 400)
        return self._session(user)

    def refresh_session(self, refresh_token):
        email = self.refresh_tokens.pop(refresh_token, None)
        if not email:
            raise IdentityError("Invalid Refresh Token: Refresh Token Not Found", 400)
        return self._session(self.users[email])

    def get_user(self, access_token):
        try:
            claims = jwt.decode(
                access_token,
                core_config.settings.SUPABASE_JWT_SECRET or "test-jwt-secret",
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.PyJWTError:
            raise IdentityError("invalid JWT", 401)
        return {"id": claims["sub"], "email": claims.get("email"), "role": claims.get("role")}

    def update_user_password(self, user_id, password):
        for user in self.users.values():
            if user["id"] == user_id:
                user["password"] = password
                return {"id": user_id, "email": user["email"]}
        raise IdentityError("User not found", 404)


@pytest.fixture(autouse=True)
def fake_identity(monkeypatch):
    provider = FakeIdentityProvider()
    for name in ("create_user", "sign_in_with_password", "refresh_session", "get_user", "update_user_password"):
        monkeypatch.setattr(identity_service, name, getattr(provider, name))
    return provider


@pytest.fixture()
def db_session_override():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    def _get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db
    try:
        yield db
    finally:
        db.close()
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session_override):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def owner_headers():
    return {"Authorization": f"Bearer {make_token(OWNER_ID)}"}


@pytest.fixture
def other_headers():
    return {"Authorization": f"Bearer {make_token(OTHER_ID)}"}


@pytest.fixture
def test_store(db_session_override):
    """A store owned by OWNER_ID."""
    store = Store(name="Noodle Stall", store_id="noodle-stall", owner_id=OWNER_ID)
    db_session_override.add(store)
    db_session_override.commit()
    db_session_override.refresh(store)
    return store


@pytest.fixture
def token_factory():
    return make_token
