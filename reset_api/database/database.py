from sqlalchemy.engine import make_url
from sqlmodel import Session, SQLModel, create_engine

from reset_api.core.config import get_settings

# Registers the password_reset_tokens table on SQLModel.metadata
from reset_api.models.password_reset import PasswordResetToken  # noqa: F401


def build_engine(database_url: str):
    """
    Create the SQLAlchemy engine for the given URL.

    Connections are checked before use. SQLite connections may be used from the
    threadpool that runs the request handlers.
    """
    connect_args = {}
    if make_url(database_url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(get_settings().DATABASE_URL)


def create_db_and_tables():
    """Create the password_reset_tokens table if it does not exist."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    Provide a context-managed SQLModel session.

    Returns:
        session (Session): A SQLModel Session bound to the module-level engine. The session is yielded for use and is closed when the generator exits.
    """
    with Session(engine) as session:
        yield session
