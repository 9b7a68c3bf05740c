"""Trip lifecycle: keeps vehicle availability in step with open trips.

A vehicle is rentable by at most one open trip (not completed, not deleted).
``Vehicle.is_available`` mirrors that state and is written only here:

- create_trip marks the vehicle unavailable once the trip row exists
- end_trip prices the trip and releases the vehicle
- delete_trip removes the row and releases the vehicle

Every operation re-reads what it needs from storage and runs inside a single
``transaction()``, so the trip write and the vehicle write commit together.
"""
import logging
from typing import Optional
from db import transaction
from errors import ForbiddenError, NotFoundError, ValidationError
from models import Role, Trip, User, Vehicle
from pricing import compute_trip_cost
from schemas import TripPatch
from validation import build, require_fields

logger = logging.getLogger(__name__)

TRIP_FIELDS = [
    "customer_id",
    "vehicle_id",
    "start_date",
    "end_date",
    "location",
    "distance_km",
    "passengers",
]


def create_trip(payload: dict) -> Trip:
    require_fields(payload, TRIP_FIELDS)
    data = {k: payload[k] for k in TRIP_FIELDS}
    data["customer_id"] = str(data["customer_id"])
    data["vehicle_id"] = str(data["vehicle_id"])
    # is_completed and trip_cost always start from their defaults
    trip = build(Trip, data)

    with transaction() as session:
        customer = session.get(User, trip.customer_id)
        if not customer:
            raise NotFoundError("customer not found")
        if customer.role != Role.CUSTOMER.value:
            raise ForbiddenError("only customers can create trips")

        vehicle = session.get(Vehicle, trip.vehicle_id)
        if not vehicle:
            raise NotFoundError("vehicle not found")
        if not vehicle.is_available:
            raise ValidationError("vehicle is not available")
        if trip.passengers > vehicle.allowed_passengers:
            raise ValidationError(
                f"passengers exceed vehicle capacity of {vehicle.allowed_passengers}"
            )

        session.add(trip)
        session.flush()
        vehicle.is_available = False
        session.add(vehicle)

    logger.info("trip %s created on vehicle %s", trip.id, trip.vehicle_id)
    return trip


def get_trip(trip_id: str) -> Trip:
    with transaction() as session:
        trip = session.get(Trip, trip_id)
        if not trip:
            raise NotFoundError("trip not found")
        return trip


def update_trip(trip_id: str, payload: dict) -> Trip:
    """Patch the schedule or location of a trip.

    ``is_completed`` and ``trip_cost`` are not patchable; they change only
    through ``end_trip``.
    """
    changes = build(TripPatch, payload).model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError("no updatable fields given (start_date, end_date, location)")

    with transaction() as session:
        trip = session.get(Trip, trip_id)
        if not trip:
            raise NotFoundError("trip not found")
        for k, v in changes.items():
            setattr(trip, k, v)
        session.add(trip)

    logger.info("trip %s updated: %s", trip_id, ", ".join(sorted(changes)))
    return trip


def end_trip(trip_id: str) -> Trip:
    with transaction() as session:
        trip = session.get(Trip, trip_id)
        if not trip:
            raise NotFoundError("trip not found")
        if trip.is_completed:
            raise ValidationError("trip already ended")

        vehicle = session.get(Vehicle, trip.vehicle_id)
        if not vehicle:
            raise NotFoundError("vehicle not found")

        trip.trip_cost = compute_trip_cost(trip.distance_km, vehicle.rate_per_km)
        trip.is_completed = True
        vehicle.is_available = True
        session.add(trip)
        session.add(vehicle)

    logger.info("trip %s ended, cost=%s", trip.id, trip.trip_cost)
    return trip


def delete_trip(trip_id: str) -> Optional[str]:
    """Remove a trip and release its vehicle.

    The vehicle is released even when the trip had already been ended.
    Returns the id of the released vehicle, if it still exists.
    """
    with transaction() as session:
        trip = session.get(Trip, trip_id)
        if not trip:
            raise NotFoundError("trip not found")
        vehicle = session.get(Vehicle, trip.vehicle_id)
        session.delete(trip)
        if vehicle:
            vehicle.is_available = True
            session.add(vehicle)

    logger.info("trip %s deleted", trip_id)
    return vehicle.id if vehicle else None
