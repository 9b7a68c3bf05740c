import logging
import bcrypt
from sqlmodel import select
from db import transaction
from errors import ConflictError, ValidationError
from models import User
from validation import build, is_valid_role, require_fields

logger = logging.getLogger(__name__)

SIGNUP_FIELDS = ["name", "email", "password", "role"]

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def signup(payload: dict) -> User:
    require_fields(payload, SIGNUP_FIELDS)
    if not is_valid_role(payload["role"]):
        raise ValidationError("role must be one of customer, owner, driver")
    password = str(payload["password"])
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    user = build(User, {
        "name": payload["name"],
        "email": payload["email"],
        "password": hash_password(password),
        "role": payload["role"],
    })
    with transaction() as session:
        existing = session.exec(select(User).where(User.email == user.email)).first()
        if existing:
            raise ConflictError("email already registered")
        session.add(user)

    logger.info("user %s signed up as %s", user.id, user.role)
    return user


def public_user(user: User) -> dict:
    return user.model_dump(mode="json", exclude={"password"})
