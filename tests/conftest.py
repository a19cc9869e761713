import os
import sys
from pathlib import Path
import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["MONGO_DISABLED"] = "1"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")


@pytest.fixture(scope="session")
def client() -> TestClient:
    # lazy import after env configured
    from src.main import create_app

    app = create_app()
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_store():
    from src.infrastructure.database.memory_store import get_memory_store

    get_memory_store().reset()
    yield
    get_memory_store().reset()


@pytest.fixture()
def register_user(client):
    """Register a user and return a function producing its auth header."""

    def _register(name: str = "Jane Doe", email: str = "jane@devconnect.io", password: str = "secret123"):
        body = {"name": name, "email": email, "password": password, "password2": password}
        r = client.post("/api/users/register", json=body)
        assert r.status_code == 200, r.text
        r2 = client.post("/api/users/login", json={"email": email, "password": password})
        assert r2.status_code == 200, r2.text
        return {"Authorization": r2.json()["token"]}

    return _register


@pytest.fixture()
def auth_header(register_user) -> dict[str, str]:
    return register_user()
