import os
import sys
import itertools
import pytest

# ensure project root in sys.path so the flat modules import without installation
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlmodel import SQLModel, create_engine, select
from db import get_session
from models import Role, User, Vehicle

_seq = itertools.count(1)


# ────────────────────────── fixtures ────────────────────────────────────────

@pytest.fixture(autouse=True)
def fresh_db(tmp_path, monkeypatch):
    """Each test runs against a fresh SQLite database."""
    import db as db_mod
    test_db = f"sqlite:///{tmp_path}/test.db"
    new_engine = create_engine(test_db, echo=False, connect_args={"check_same_thread": False})
    monkeypatch.setattr(db_mod, "engine", new_engine)
    SQLModel.metadata.create_all(new_engine)
    yield new_engine
    SQLModel.metadata.drop_all(new_engine)
    new_engine.dispose()


def _insert(row):
    session = get_session()
    session.add(row)
    session.commit()
    session.refresh(row)
    session.close()
    return row


@pytest.fixture
def make_user():
    def _make(role=Role.CUSTOMER.value, name=None):
        n = next(_seq)
        return _insert(User(
            name=name or f"{role}{n}",
            email=f"{role}{n}@fleet.test",
            password="not-a-real-hash",
            role=role,
        ))
    return _make


@pytest.fixture
def make_vehicle(make_user):
    def _make(owner_id=None, allowed_passengers=4, rate_per_km=10.0, is_available=True, driver_id=None):
        if owner_id is None:
            owner_id = make_user(Role.OWNER.value).id
        n = next(_seq)
        return _insert(Vehicle(
            name=f"Car {n}",
            registration_number=f"REG-{n:05d}",
            allowed_passengers=allowed_passengers,
            rate_per_km=rate_per_km,
            owner_id=owner_id,
            is_available=is_available,
            driver_id=driver_id,
        ))
    return _make


@pytest.fixture
def trip_payload(make_user, make_vehicle):
    """Builds a valid create-trip payload, creating the customer/vehicle unless given."""
    def _make(customer_id=None, vehicle_id=None, **overrides):
        payload = {
            "customer_id": customer_id or make_user(Role.CUSTOMER.value).id,
            "vehicle_id": vehicle_id or make_vehicle().id,
            "start_date": "2026-11-01",
            "end_date": "2026-11-03",
            "location": "Central Station",
            "distance_km": 50,
            "passengers": 2,
        }
        payload.update(overrides)
        return payload
    return _make


def reload(model, row_id):
    session = get_session()
    try:
        return session.get(model, row_id)
    finally:
        session.close()


@pytest.fixture
def fetch():
    return reload


@pytest.fixture
def count_rows():
    def _count(model):
        session = get_session()
        try:
            return len(session.exec(select(model)).all())
        finally:
            session.close()
    return _count


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
