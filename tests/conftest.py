# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration and data for models, scoring and APIs

Every API test runs against its own temporary JSON document, seeded with:
- Company: company-mides ("MIDES")
- Admin:   admin-1 / admin@mides.kz / ADMIN_PASSWORD
- The default ten-question bank and 13 / 20 thresholds on both axes
"""

import copy
import os
import tempfile

# Settings are read at import time; configure the environment first
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-0123456789")
os.environ["CACHE_ENABLED"] = "false"
os.environ["APP_ENV"] = "development"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin-pass-123"
os.environ["DATA_FILE"] = os.path.join(tempfile.mkdtemp(prefix="ninebox-tests-"), "db.json")
os.environ.pop("GEMINI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from ninebox.config import settings
from ninebox.core.dependencies import get_document_store
from ninebox.main import app
from ninebox.models.enumerations import Axis, QuestionCategory
from ninebox.repositories.base import JsonDocumentStore
from ninebox.repositories.seed import DEFAULT_ADMIN_ID, DEFAULT_COMPANY_ID, build_default_document
from ninebox.scoring.engine import ScoringConfig
from ninebox.scoring.question_bank import default_questions

from helpers import answers_all, make_question

ADMIN_EMAIL = "admin@mides.kz"
ADMIN_PASSWORD = "admin-pass-123"
USER_PASSWORD = "secret-pass"


# =============================================================================
# ANSWER SETS FOR THE DEFAULT BANK
# =============================================================================

@pytest.fixture
def all_low_answers():
    return answers_all(0)


@pytest.fixture
def all_medium_answers():
    return answers_all(1)


@pytest.fixture
def all_high_answers():
    return answers_all(2)


@pytest.fixture
def leaving_star_answers():
    """Top answers everywhere, but the retention question says they are leaving."""
    answers = answers_all(2)
    answers["val_retention"] = 3
    return answers


# =============================================================================
# SCORING CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def default_thresholds():
    return {"x": {"low_max": 13, "med_max": 20}, "y": {"low_max": 13, "med_max": 20}}


@pytest.fixture
def default_config(default_thresholds):
    """The shipped bank with the default thresholds."""
    return ScoringConfig.build(default_questions(), default_thresholds, default_thresholds)


@pytest.fixture
def single_axis_config(default_thresholds):
    """One x question whose explicit weights sit on the 13 / 20 boundaries, plus one y question."""
    questions = [
        make_question("x1", axis=Axis.X, weights={0: 13, 1: 14, 2: 20, 3: 21}, values=(0, 1, 2, 3)),
        make_question("y1", category=QuestionCategory.POTENTIAL, axis=Axis.Y),
    ]
    return ScoringConfig.build(questions, default_thresholds, default_thresholds)


# =============================================================================
# DOCUMENT STORE FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def seed_document():
    """Seed document built once (bcrypt hashing is slow)."""
    return build_default_document(settings)


@pytest.fixture
def store(tmp_path, seed_document):
    """Fresh JSON store in a temporary directory."""
    return JsonDocumentStore(
        tmp_path / "db.json",
        seed_factory=lambda: copy.deepcopy(seed_document),
    )


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(store):
    """Create a TestClient for the FastAPI application over the temporary store."""
    app.dependency_overrides[get_document_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client, email, password):
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def admin_id():
    return DEFAULT_ADMIN_ID


@pytest.fixture
def default_company_id():
    return DEFAULT_COMPANY_ID


@pytest.fixture
def create_user(client, admin_headers):
    """Factory: create a user through the API and return (user, auth headers)."""
    counter = {"n": 0}

    def _create(role="manager", company_id=DEFAULT_COMPANY_ID, name=None, headers=None):
        counter["n"] += 1
        email = f"{role}{counter['n']}@example.com"
        response = client.post(
            "/api/v1/users",
            json={
                "email": email,
                "name": name or f"{role.title()} {counter['n']}",
                "password": USER_PASSWORD,
                "role": role,
                "company_id": company_id,
            },
            headers=headers or admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json(), login(client, email, USER_PASSWORD)

    return _create


@pytest.fixture
def create_employee(client, admin_headers):
    """Factory: create an employee profile and return it."""

    def _create(name="Aigerim Sadykova", position="Analyst", company_id=DEFAULT_COMPANY_ID, headers=None):
        response = client.post(
            "/api/v1/employees",
            json={"name": name, "position": position, "company_id": company_id},
            headers=headers or admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
