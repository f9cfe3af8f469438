import pytest
from fastapi.testclient import TestClient

from tailorshop.core.config import Settings
from tailorshop.db.database import Database
from tailorshop.main import create_application
from tailorshop.services.artifact_store import ArtifactStore
from tailorshop.services.order_repository import OrderRepository
from tailorshop.services.order_service import OrderService


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def app_settings(tmp_path, upload_dir):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'orders.db'}",
        UPLOAD_DIR=str(upload_dir),
    )


@pytest.fixture
def database(app_settings):
    db = Database(app_settings.DATABASE_URL)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    db = database.session()
    yield db
    db.close()


@pytest.fixture
def repository(session):
    return OrderRepository(session)


@pytest.fixture
def artifact_store(upload_dir):
    return ArtifactStore(str(upload_dir))


@pytest.fixture
def order_service(repository, artifact_store):
    return OrderService(repository, artifact_store)


@pytest.fixture
def client(app_settings):
    app = create_application(app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def stored_files(upload_dir):
    """Names of the files currently in the upload directory"""
    return lambda: sorted(p.name for p in upload_dir.iterdir())
