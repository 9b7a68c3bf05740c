import logging
from datetime import datetime, timezone
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from db import get_session
from models import RequestLog

logger = logging.getLogger(__name__)


def format_line(method: str, path: str, when: datetime) -> str:
    return f"{method} {path} {when.isoformat()}"


def append_line(line: str):
    session = get_session()
    try:
        session.add(RequestLog(line=line))
        session.commit()
    finally:
        session.close()


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Appends one audit line per inbound request before it is dispatched.

    A failed write never fails the request.
    """

    async def dispatch(self, request: Request, call_next):
        line = format_line(request.method, request.url.path, datetime.now(timezone.utc))
        try:
            append_line(line)
        except SQLAlchemyError as exc:
            logger.warning("could not write request log %r: %s", line, exc)
        return await call_next(request)
