from sqlmodel import SQLModel, create_engine, Session
from chocostore.config import settings

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    pool_recycle=1800,
)


def create_db_and_tables():
    """Create every table directly; outside ENV=local use `alembic upgrade head`."""
    import chocostore.models  # noqa: F401 registers every table
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
