from sqlalchemy import func
from sqlmodel import select
from db import transaction
from models import Role, Trip, User, Vehicle


def _count(session, model, *where) -> int:
    stmt = select(func.count()).select_from(model)
    for clause in where:
        stmt = stmt.where(clause)
    return session.exec(stmt).one()


def collect_counts() -> dict:
    with transaction() as session:
        return {
            "customers": _count(session, User, User.role == Role.CUSTOMER.value),
            "owners": _count(session, User, User.role == Role.OWNER.value),
            "drivers": _count(session, User, User.role == Role.DRIVER.value),
            "vehicles": _count(session, Vehicle),
            "trips": _count(session, Trip),
        }
