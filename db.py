from contextlib import contextmanager
from sqlmodel import create_engine, Session
from sqlmodel import SQLModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from config import DATABASE_URL
from errors import ConflictError, StorageError

# SQLite needs check_same_thread=False; Postgres does not
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
_engine_kwargs = {} if DATABASE_URL.startswith("sqlite") else {"pool_pre_ping": True}

engine = create_engine(DATABASE_URL, echo=False, connect_args=_connect_args, **_engine_kwargs)


def init_db():
    # registers the tables on SQLModel.metadata
    import models  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session():
    # rows handed back to handlers must stay readable after commit
    return Session(engine, expire_on_commit=False)


@contextmanager
def transaction():
    """Run a unit of work in one session and commit it atomically.

    Storage failures roll back everything done in the block and surface as
    ``ConflictError`` (unique/check violations) or ``StorageError`` carrying
    the driver's message.
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError(str(getattr(exc, "orig", None) or exc)) from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
