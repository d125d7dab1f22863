"""Fixtures backing the SQLite integration tests."""

import pytest
from sqlalchemy.orm import sessionmaker

from netwatch.config import Settings
from netwatch.database import create_db_engine, init_db


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'netwatch.db'}",
        hack_duration_seconds=60,
        hack_poll_interval_seconds=0.01,
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.database_url, echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
