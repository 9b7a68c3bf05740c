from typing import Iterable, List
from pydantic import ValidationError as PydanticValidationError
from errors import ValidationError
from models import Role


def missing_fields(payload: dict, required: Iterable[str]) -> List[str]:
    return [k for k in required if payload.get(k) in (None, "")]


def require_fields(payload: dict, required: Iterable[str]):
    missing = missing_fields(payload, required)
    if missing:
        raise ValidationError(f"missing {', '.join(missing)}")


def is_valid_role(role) -> bool:
    return isinstance(role, str) and role in {r.value for r in Role}


def describe(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err["loc"]) or "body"
    return f"invalid {field}: {err['msg']}"


def build(model, data: dict):
    """Validate ``data`` into ``model``, reporting bad values as a 400."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(describe(exc)) from exc
