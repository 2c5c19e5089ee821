"""Test fixtures and configuration."""

import os
import tempfile

# The application engine must not touch the development database
_TEST_DIR = tempfile.mkdtemp(prefix="projektmester-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR}/app.db")
os.environ.setdefault("STORAGE_PATH", os.path.join(_TEST_DIR, "uploads"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projektmester.api.deps import get_file_storage
from projektmester.database import Base, get_db
from projektmester.main import app
from projektmester.records import RecordStore
from projektmester.schemas.finance import Cost, Material
from projektmester.schemas.project import Project
from projektmester.schemas.task import Task
from projektmester.schemas.user import UserRecord
from projektmester.services.file_storage_service import FileStorage
from projektmester.services.project_data_service import ProjectDataService


# Create test database
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db) -> RecordStore:
    return RecordStore(db)


@pytest.fixture
def data(store) -> ProjectDataService:
    return ProjectDataService(store)


@pytest.fixture
def file_storage(tmp_path) -> FileStorage:
    return FileStorage(tmp_path / "uploads")


@pytest.fixture(scope="function")
def client(db, file_storage):
    """Create a test client with database and storage overrides."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_file_storage] = lambda: file_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(data) -> UserRecord:
    """Create an admin user."""
    return data.save_user(UserRecord(
        id="u1",
        email="admin@projektmester.hu",
        name="Kovács Admin János",
        role="admin",
        password="admin",
    ))


@pytest.fixture
def regular_user(data) -> UserRecord:
    """Create a non-admin user."""
    return data.save_user(UserRecord(
        id="u2",
        email="user@projektmester.hu",
        name="Szabó Péter",
        role="user",
        password="user123",
    ))


@pytest.fixture
def other_user(data) -> UserRecord:
    """Create a non-admin user with no project assignments."""
    return data.save_user(UserRecord(
        id="u3",
        email="kiss.anna@projektmester.hu",
        name="Kiss Anna",
        role="user",
        password="anna123",
    ))


@pytest.fixture
def test_project(data, admin_user, regular_user) -> Project:
    """Create a project owned by the admin and assigned to the regular user."""
    return data.save_project(Project(
        id="p1",
        name="Belvárosi Lakásfelújítás",
        description="Elektromos hálózat és vízhálózat cseréje.",
        status="kivitelezes",
        customer_name="Nagy Erzsébet",
        customer_email="nagy.erzsi@example.com",
        customer_phone="+36 30 123 4567",
        location="1051 Budapest, Sas utca 4.",
        start_date="2024-03-01",
        end_date="2024-05-15",
        created_at="2024-02-15T10:00:00Z",
        created_by=admin_user.name,
        created_by_id=admin_user.id,
        assigned_users=[admin_user.id, regular_user.id],
    ))


@pytest.fixture
def project_tasks(data, test_project) -> list[Task]:
    """Three tasks with orders 0, 1, 2."""
    tasks = []
    for order, title in enumerate(["Bontás", "Villanyszerelés", "Burkolás"]):
        tasks.append(data.save_task(Task(
            id=f"t{order + 1}",
            project_id=test_project.id,
            title=title,
            order=order,
        )))
    return tasks


@pytest.fixture
def project_finances(data, test_project) -> tuple[list[Material], list[Cost]]:
    """Materials 3 x 1000 and 2 x 500 plus one 2000 cost."""
    materials = [
        data.save_material(Material(id="m1", project_id=test_project.id, name="Csempe", quantity=3, unit="m2", unit_price=1000)),
        data.save_material(Material(id="m2", project_id=test_project.id, name="Ragasztó", quantity=2, unit="csomag", unit_price=500)),
    ]
    costs = [
        data.save_cost(Cost(id="c1", project_id=test_project.id, type="munkadij", description="Burkolás", amount=2000)),
    ]
    return materials, costs


def get_auth_headers(client, email, password):
    """Get auth headers for a user."""
    response = client.post(
        "/api/auth/login",
        data={"username": email, "password": password},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client, admin_user):
    return get_auth_headers(client, admin_user.email, "admin")


@pytest.fixture
def user_headers(client, regular_user):
    return get_auth_headers(client, regular_user.email, "user123")


@pytest.fixture
def other_headers(client, other_user):
    return get_auth_headers(client, other_user.email, "anna123")
