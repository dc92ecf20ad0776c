"""Pytest configuration and fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tasklists.api.auth_api import signup
from tasklists.auth.guard import OperationContext, build_context
from tasklists.config.loader import get_auth_settings
from tasklists.database.schema import Base


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def auth_settings():
    """Auth settings with cheap bcrypt rounds."""
    return get_auth_settings({"auth": {"secret_key": "test-secret", "bcrypt_rounds": 4}})


@pytest.fixture
def anon_ctx(session, auth_settings):
    """Context of a caller without a token."""
    return OperationContext(session=session, auth=auth_settings)


@pytest.fixture
def signed_in(session, auth_settings):
    """Factory: sign up a user and return that user's operation context."""
    def _signed_in(email="a@x.com", password="pw", name="A"):
        payload = signup(OperationContext(session=session, auth=auth_settings), email, password, name)
        return build_context(session, auth_settings, payload.token)
    return _signed_in
