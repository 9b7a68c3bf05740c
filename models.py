from typing import Optional
from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint
from datetime import date, datetime, timezone
from enum import Enum
from uuid import uuid4


def new_id() -> str:
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    CUSTOMER = "customer"
    OWNER = "owner"
    DRIVER = "driver"


class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('customer', 'owner', 'driver')", name="ck_users_role"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password: str  # bcrypt hash, never serialized back to clients
    role: str = Field(index=True)  # customer, owner, driver
    created_at: datetime = Field(default_factory=utc_now)


class Vehicle(SQLModel, table=True):
    __tablename__ = "vehicles"
    __table_args__ = (
        CheckConstraint("allowed_passengers > 0", name="ck_vehicles_allowed_passengers"),
        CheckConstraint("rate_per_km > 0", name="ck_vehicles_rate_per_km"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    registration_number: str = Field(unique=True, index=True)
    allowed_passengers: int = Field(gt=0)
    is_available: bool = True  # flipped only by the trip lifecycle
    driver_id: Optional[str] = Field(default=None, foreign_key="users.id")
    rate_per_km: float = Field(gt=0)
    owner_id: str = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)


class Trip(SQLModel, table=True):
    __tablename__ = "trips"
    __table_args__ = (
        CheckConstraint("distance_km > 0", name="ck_trips_distance_km"),
        CheckConstraint("passengers > 0", name="ck_trips_passengers"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    customer_id: str = Field(foreign_key="users.id", index=True)
    vehicle_id: str = Field(foreign_key="vehicles.id", index=True)
    start_date: date
    end_date: date
    location: str
    distance_km: float = Field(gt=0)
    passengers: int = Field(gt=0)
    trip_cost: float = 0.0  # written once, by end_trip
    is_completed: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class RequestLog(SQLModel, table=True):
    __tablename__ = "request_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    line: str  # "METHOD path ISO-timestamp"
    created_at: datetime = Field(default_factory=utc_now)
