import logging
from db import transaction
from errors import ForbiddenError, NotFoundError, ValidationError
from models import Role, User, Vehicle
from validation import build, require_fields

logger = logging.getLogger(__name__)

VEHICLE_FIELDS = [
    "name",
    "registration_number",
    "allowed_passengers",
    "rate_per_km",
    "owner_id",
]


def add_vehicle(payload: dict) -> Vehicle:
    require_fields(payload, VEHICLE_FIELDS)
    data = {k: payload[k] for k in VEHICLE_FIELDS}
    data["owner_id"] = str(data["owner_id"])
    vehicle = build(Vehicle, data)

    with transaction() as session:
        owner = session.get(User, vehicle.owner_id)
        if not owner:
            raise NotFoundError("owner not found")
        if owner.role != Role.OWNER.value:
            raise ForbiddenError("only owners can add vehicles")
        # duplicate registration numbers surface as 409 from the unique index
        session.add(vehicle)

    logger.info("vehicle %s (%s) added by owner %s", vehicle.id, vehicle.registration_number, vehicle.owner_id)
    return vehicle


def assign_driver(vehicle_id: str, payload: dict) -> Vehicle:
    require_fields(payload, ["driver_id"])
    driver_id = str(payload["driver_id"])

    with transaction() as session:
        vehicle = session.get(Vehicle, vehicle_id)
        if not vehicle:
            raise NotFoundError("vehicle not found")
        driver = session.get(User, driver_id)
        if not driver:
            raise NotFoundError("driver not found")
        if driver.role != Role.DRIVER.value:
            raise ForbiddenError("assigned user must be a driver")
        vehicle.driver_id = driver.id
        session.add(vehicle)

    logger.info("driver %s assigned to vehicle %s", driver_id, vehicle_id)
    return vehicle


def get_vehicle(vehicle_id: str) -> Vehicle:
    with transaction() as session:
        vehicle = session.get(Vehicle, vehicle_id)
        if not vehicle:
            raise NotFoundError("vehicle not found")
        return vehicle
