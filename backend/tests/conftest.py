import os
import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Keep the application engine off disk during tests
os.environ.setdefault("ORDER_SERVICE_DATABASE_URL", "sqlite://")

# Now import after path is set
import pytest
from sqlalchemy.orm import sessionmaker
from database import Base, build_engine
import models  # noqa: F401


@pytest.fixture
def engine():
    """In-memory database shared by every session in one test"""
    engine = build_engine('sqlite://')
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create in-memory database for testing"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def order_service(db_session):
    from services.order_service import OrderService
    return OrderService(db_session)


@pytest.fixture
def client(session_factory):
    """TestClient whose requests use the test database"""
    from fastapi.testclient import TestClient
    from database import get_db
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
