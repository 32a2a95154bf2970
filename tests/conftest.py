import os
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from salon.auth import Actor  # noqa: E402
from salon.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from salon.main import app  # noqa: E402
from salon.models import Role, Service, User  # noqa: E402
from salon.security_utils import create_access_token  # noqa: E402

ADMIN_ID = 1
MANICURIST_ID = 7
OTHER_MANICURIST_ID = 8
CLIENT_ID = 20
OTHER_CLIENT_ID = 21
SERVICE_ID = 1

# Seeded accounts never log in with a password
UNUSABLE_HASH = "!"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def people(db):
    """One account per role plus a second manicurist and client"""
    db.add_all(
        [
            User(id=ADMIN_ID, role_id=Role.ADMIN.value, first_name="Ana", last_name="Rojas",
                 email="admin@salon.test", password_hash=UNUSABLE_HASH),
            User(id=MANICURIST_ID, role_id=Role.MANICURIST.value, first_name="Mara", last_name="Gil",
                 email="mara@salon.test", phone_number="3001234567", password_hash=UNUSABLE_HASH),
            User(id=OTHER_MANICURIST_ID, role_id=Role.MANICURIST.value, first_name="Lina", last_name="Paz",
                 email="lina@salon.test", password_hash=UNUSABLE_HASH),
            User(id=CLIENT_ID, role_id=Role.CLIENT.value, first_name="Sofia", last_name="Mejia",
                 email="sofia@salon.test", phone_number="3109876543", password_hash=UNUSABLE_HASH),
            User(id=OTHER_CLIENT_ID, role_id=Role.CLIENT.value, first_name="Elena", last_name="Diaz",
                 email="elena@salon.test", password_hash=UNUSABLE_HASH),
        ]
    )
    db.commit()
    return SimpleNamespace(
        admin=ADMIN_ID,
        manicurist=MANICURIST_ID,
        other_manicurist=OTHER_MANICURIST_ID,
        client=CLIENT_ID,
        other_client=OTHER_CLIENT_ID,
    )


@pytest.fixture
def gel_service(db):
    """60 minutes, 50000 list price, 40% to the manicurist"""
    service = Service(
        id=SERVICE_ID,
        name="Semipermanente",
        price=Decimal("50000"),
        duration_min=60,
        manicurist_commission_rate=Decimal("40"),
    )
    db.add(service)
    db.commit()
    return SERVICE_ID


@pytest.fixture
def salon(people, gel_service):
    return people


def auth_headers(user_id: int, role: Role) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, role.value)}"}


@pytest.fixture
def as_admin():
    return auth_headers(ADMIN_ID, Role.ADMIN)


@pytest.fixture
def as_manicurist():
    return auth_headers(MANICURIST_ID, Role.MANICURIST)


@pytest.fixture
def as_other_manicurist():
    return auth_headers(OTHER_MANICURIST_ID, Role.MANICURIST)


@pytest.fixture
def as_client():
    return auth_headers(CLIENT_ID, Role.CLIENT)


@pytest.fixture
def as_other_client():
    return auth_headers(OTHER_CLIENT_ID, Role.CLIENT)


def actor(user_id: int, role: Role) -> Actor:
    return Actor(user_id=user_id, role=role)


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 6, day, hour, minute)
