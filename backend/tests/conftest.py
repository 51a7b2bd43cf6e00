from pathlib import Path
import os
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

TEST_DB = Path(__file__).resolve().parent / "test_app.db"
# Runs before any test module imports `staff_api`, so the app binds to a fresh file.
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
if TEST_DB.exists():
    TEST_DB.unlink()

from staff_api.database import create_db_and_tables  # noqa: E402


@pytest.fixture()
def session():
    """Yield a session bound to a private in-memory SQLite database."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    create_db_and_tables(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()
