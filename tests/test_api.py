# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import status

from ninebox.core.dependencies import get_advice_service
from ninebox.main import app
from ninebox.repositories.settings_repository import SettingsRepository
from ninebox.services.advice_service import MSG_NOT_CONFIGURED, AdviceService

from helpers import answers_all

API = "/api/v1"


def submit(client, headers, employee_id, answers):
    return client.post(
        f"{API}/assessments",
        json={"employee_id": employee_id, "answers": answers},
        headers=headers,
    )


def error_code(response):
    body = response.json()
    return body["detail"]["error_code"] if "detail" in body else body["error_code"]


# ROOT / HEALTH / GRID (PUBLIC)


class TestPublicEndpoints:
    """Tests for endpoints that need no token."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"]["store"].startswith("healthy")
        assert data["dependencies"]["redis"] == "disabled"

    def test_health_with_corrupt_store(self, client, store):
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text("{broken", encoding="utf-8")
        response = client.get("/health")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["status"] == "unhealthy"

    def test_grid_categories(self, client):
        response = client.get(f"{API}/grid/categories")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 9
        assert len({c["id"] for c in data["items"]}) == 9

    def test_grid_category_lookup(self, client):
        response = client.get(f"{API}/grid/categories/2/2")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == "star"

    def test_grid_category_out_of_range(self, client):
        response = client.get(f"{API}/grid/categories/3/0")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert error_code(response) == "CATEGORY_NOT_FOUND"


# AUTH


class TestAuth:
    """Tests for /api/v1/auth endpoints."""

    def test_login_success(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "ADMIN@mides.kz", "password": "admin-pass-123"})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["role"] == "admin"
        assert "password_hash" not in data["user"]

    def test_login_wrong_password(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "admin@mides.kz", "password": "nope"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert error_code(response) == "INVALID_CREDENTIALS"

    def test_login_unknown_user(self, client):
        response = client.post(f"{API}/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me(self, client, admin_headers, admin_id):
        response = client.get(f"{API}/auth/me", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == admin_id

    def test_missing_token(self, client):
        response = client.get(f"{API}/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert error_code(response) == "INVALID_TOKEN"

    def test_garbage_token(self, client):
        response = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_of_deleted_user(self, client, admin_headers, create_user):
        manager, manager_headers = create_user()
        client.delete(f"{API}/users/{manager['id']}", headers=admin_headers)
        response = client.get(f"{API}/auth/me", headers=manager_headers)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_malformed_json(self, client):
        response = client.post(
            f"{API}/auth/login",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"


# COMPANIES


class TestCompanies:
    """Tests for /api/v1/companies endpoints."""

    def test_list_contains_default(self, client, admin_headers, default_company_id):
        response = client.get(f"{API}/companies", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert default_company_id in [c["id"] for c in response.json()["items"]]

    def test_create_and_update(self, client, admin_headers):
        response = client.post(f"{API}/companies", json={"name": "Acme"}, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
        company = response.json()
        assert company["id"].startswith("comp-")
        assert company["disable_user_add_employees"] is False

        response = client.patch(
            f"{API}/companies/{company['id']}",
            json={"disable_user_add_employees": True},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {**company, "disable_user_add_employees": True}

    def test_duplicate_name(self, client, admin_headers):
        response = client.post(f"{API}/companies", json={"name": "mides"}, headers=admin_headers)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert error_code(response) == "COMPANY_ALREADY_EXISTS"

    def test_manager_cannot_create(self, client, create_user):
        _, manager_headers = create_user()
        response = client.post(f"{API}/companies", json={"name": "Nope"}, headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert error_code(response) == "FORBIDDEN"

    def test_cannot_delete_own_company(self, client, admin_headers, default_company_id):
        response = client.delete(f"{API}/companies/{default_company_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_cascades(self, client, admin_headers, create_user, create_employee):
        company = client.post(f"{API}/companies", json={"name": "Acme"}, headers=admin_headers).json()
        manager, _ = create_user(company_id=company["id"])
        employee = create_employee(company_id=company["id"])
        assert submit(client, admin_headers, employee["id"], answers_all(1)).status_code == 201

        response = client.delete(f"{API}/companies/{company['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_204_NO_CONTENT

        users = client.get(f"{API}/users", headers=admin_headers).json()["items"]
        assert manager["id"] not in [u["id"] for u in users]
        employees = client.get(f"{API}/employees", params={"company_id": company["id"]}, headers=admin_headers)
        assert employees.json()["total"] == 0
        assert client.get(f"{API}/results", headers=admin_headers).json()["total"] == 0

    def test_delete_unknown(self, client, admin_headers):
        response = client.delete(f"{API}/companies/comp-missing", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert error_code(response) == "COMPANY_NOT_FOUND"


# USERS


class TestUsers:
    """Tests for /api/v1/users endpoints."""

    def test_create_manager_creates_profile(self, client, admin_headers, create_user):
        manager, _ = create_user()
        employees = client.get(f"{API}/employees", headers=admin_headers).json()["items"]
        linked = [e for e in employees if e["linked_user_id"] == manager["id"]]
        assert len(linked) == 1
        assert linked[0]["name"] == manager["name"]

    def test_duplicate_email(self, client, admin_headers):
        payload = {"email": "dup@example.com", "name": "Dup", "password": "secret-pass"}
        assert client.post(f"{API}/users", json=payload, headers=admin_headers).status_code == 201
        payload["email"] = "DUP@example.com"
        response = client.post(f"{API}/users", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert error_code(response) == "EMAIL_ALREADY_REGISTERED"

    def test_cannot_create_admin(self, client, admin_headers):
        payload = {"email": "a2@example.com", "name": "A2", "password": "secret-pass", "role": "admin"}
        response = client.post(f"{API}/users", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_invalid_email_message(self, client, admin_headers):
        payload = {"email": "nope", "name": "X", "password": "secret-pass"}
        response = client.post(f"{API}/users", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "E-mail must be a valid address"

    def test_director_creates_only_managers(self, client, create_user):
        _, director_headers = create_user(role="director")
        payload = {"email": "d2@example.com", "name": "D2", "password": "secret-pass", "role": "director"}
        response = client.post(f"{API}/users", json=payload, headers=director_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

        payload["role"] = "manager"
        response = client.post(f"{API}/users", json=payload, headers=director_headers)
        assert response.status_code == status.HTTP_201_CREATED

    def test_director_lists_own_company(self, client, admin_headers, create_user):
        other = client.post(f"{API}/companies", json={"name": "Other"}, headers=admin_headers).json()
        outsider, _ = create_user(company_id=other["id"])
        _, director_headers = create_user(role="director")
        users = client.get(f"{API}/users", headers=director_headers).json()["items"]
        assert outsider["id"] not in [u["id"] for u in users]
        assert all(u["role"] != "admin" for u in users)

    def test_manager_cannot_list(self, client, create_user):
        _, manager_headers = create_user()
        assert client.get(f"{API}/users", headers=manager_headers).status_code == status.HTTP_403_FORBIDDEN

    def test_cannot_delete_self(self, client, admin_headers, admin_id):
        response = client.delete(f"{API}/users/{admin_id}", headers=admin_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_director_cannot_delete_director(self, client, create_user):
        other_director, _ = create_user(role="director")
        _, director_headers = create_user(role="director")
        response = client.delete(f"{API}/users/{other_director['id']}", headers=director_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_cascades(self, client, admin_headers, create_user, create_employee):
        rater, rater_headers = create_user()
        subject = create_employee()
        assert submit(client, rater_headers, subject["id"], answers_all(2)).status_code == 201

        response = client.delete(f"{API}/users/{rater['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_204_NO_CONTENT

        employees = client.get(f"{API}/employees", headers=admin_headers).json()["items"]
        assert rater["id"] not in [e["linked_user_id"] for e in employees]
        assert client.get(f"{API}/results", headers=admin_headers).json()["total"] == 0


# EMPLOYEES


class TestEmployees:
    """Tests for /api/v1/employees endpoints."""

    def test_manager_creates_in_own_company(self, client, create_user, default_company_id):
        _, manager_headers = create_user()
        response = client.post(
            f"{API}/employees", json={"name": "New Hire", "position": "Analyst"}, headers=manager_headers
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["company_id"] == default_company_id

    def test_company_flag_blocks_managers_not_admins(self, client, admin_headers, create_user, default_company_id):
        client.patch(
            f"{API}/companies/{default_company_id}",
            json={"disable_user_add_employees": True},
            headers=admin_headers,
        )
        _, manager_headers = create_user()
        payload = {"name": "Blocked", "position": "Analyst"}
        response = client.post(f"{API}/employees", json=payload, headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert client.post(f"{API}/employees", json=payload, headers=admin_headers).status_code == 201

    def test_list_scoped_to_company(self, client, admin_headers, create_user, create_employee):
        other = client.post(f"{API}/companies", json={"name": "Other"}, headers=admin_headers).json()
        outsider = create_employee(company_id=other["id"])
        _, manager_headers = create_user()
        items = client.get(f"{API}/employees", headers=manager_headers).json()["items"]
        assert outsider["id"] not in [e["id"] for e in items]

    def test_available(self, client, create_user, create_employee):
        manager, manager_headers = create_user()
        first = create_employee(name="First")
        second = create_employee(name="Second")
        submit(client, manager_headers, first["id"], answers_all(1))

        items = client.get(f"{API}/employees/available", headers=manager_headers).json()["items"]
        ids = [e["id"] for e in items]
        assert second["id"] in ids
        assert first["id"] not in ids
        assert manager["id"] not in [e["linked_user_id"] for e in items]

    def test_convert_to_user(self, client, admin_headers, create_employee):
        employee = create_employee(name="Convertible")
        response = client.post(
            f"{API}/employees/{employee['id']}/convert-to-user",
            json={"email": "conv@example.com", "password": "secret-pass"},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
        user = response.json()
        assert user["name"] == "Convertible"
        assert user["role"] == "manager"

        again = client.post(
            f"{API}/employees/{employee['id']}/convert-to-user",
            json={"email": "conv2@example.com", "password": "secret-pass"},
            headers=admin_headers,
        )
        assert again.status_code == status.HTTP_409_CONFLICT
        assert error_code(again) == "EMPLOYEE_ALREADY_LINKED"

    def test_delete_cascades(self, client, admin_headers, create_employee):
        employee = create_employee()
        submit(client, admin_headers, employee["id"], answers_all(1))
        assert client.delete(f"{API}/employees/{employee['id']}", headers=admin_headers).status_code == 204
        assert client.get(f"{API}/results", headers=admin_headers).json()["total"] == 0

    def test_manager_cannot_delete(self, client, create_user, create_employee):
        _, manager_headers = create_user()
        employee = create_employee()
        response = client.delete(f"{API}/employees/{employee['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


# QUESTIONS / SETTINGS


class TestQuestionsAndThresholds:
    """Tests for the question bank and threshold endpoints."""

    def test_list_in_bank_order(self, client, admin_headers):
        data = client.get(f"{API}/questions", headers=admin_headers).json()
        assert data["total"] == 10
        assert data["items"][0]["id"] == "perf_quality"

    def test_admin_adds_question_and_it_becomes_required(self, client, admin_headers, create_employee):
        payload = {
            "id": "pot_extra",
            "category": "potential",
            "question_text": "Extra question?",
            "options": [{"value": 0, "label": "No"}, {"value": 1, "label": "Yes"}],
        }
        response = client.post(f"{API}/questions", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["is_calibration"] is False

        employee = create_employee()
        response = submit(client, admin_headers, employee["id"], answers_all(1))
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_manager_cannot_edit_bank(self, client, create_user):
        _, manager_headers = create_user()
        response = client.delete(f"{API}/questions/perf_quality", headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_and_delete(self, client, admin_headers):
        payload = {
            "category": "performance",
            "axis": "x",
            "question_text": "Rephrased?",
            "options": [{"value": 0, "label": "A", "weight": 1}, {"value": 1, "label": "B", "weight": 10}],
        }
        response = client.put(f"{API}/questions/perf_quality", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["question_text"] == "Rephrased?"

        assert client.delete(f"{API}/questions/perf_quality", headers=admin_headers).status_code == 204
        assert client.get(f"{API}/questions/perf_quality", headers=admin_headers).status_code == 404

    def test_duplicate_option_values_rejected(self, client, admin_headers):
        payload = {
            "category": "performance",
            "question_text": "?",
            "options": [{"value": 0, "label": "A"}, {"value": 0, "label": "B"}],
        }
        response = client.post(f"{API}/questions", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_get_thresholds(self, client, admin_headers):
        data = client.get(f"{API}/settings/thresholds", headers=admin_headers).json()
        assert data == {"x": {"low_max": 13, "med_max": 20}, "y": {"low_max": 13, "med_max": 20}}

    def test_update_thresholds_changes_classification(self, client, admin_headers):
        payload = {"x": {"low_max": 30, "med_max": 40}, "y": {"low_max": 13, "med_max": 20}}
        response = client.put(f"{API}/settings/thresholds", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK

        preview = client.post(f"{API}/scoring/preview", json={"answers": answers_all(2)}, headers=admin_headers)
        data = preview.json()
        assert data["performance"] == 0
        assert data["potential"] == 2

    def test_inverted_thresholds_rejected(self, client, admin_headers):
        payload = {"x": {"low_max": 20, "med_max": 13}, "y": {"low_max": 13, "med_max": 20}}
        response = client.put(f"{API}/settings/thresholds", json=payload, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "low_max must be less than med_max"

    def test_stored_inverted_thresholds_still_readable(self, client, admin_headers, store):
        SettingsRepository(store).set_thresholds({"x": {"low_max": 20, "med_max": 13}})
        response = client.get(f"{API}/settings/thresholds", headers=admin_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "x": {"low_max": 20, "med_max": 13},
            "y": {"low_max": 13, "med_max": 20},
        }

    def test_manager_cannot_update_thresholds(self, client, create_user):
        _, manager_headers = create_user()
        payload = {"x": {"low_max": 1, "med_max": 2}, "y": {"low_max": 1, "med_max": 2}}
        response = client.put(f"{API}/settings/thresholds", json=payload, headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


# SCORING PREVIEW


class TestScoringPreview:
    """Tests for POST /api/v1/scoring/preview."""

    def test_incomplete_not_ready(self, client, admin_headers):
        response = client.post(
            f"{API}/scoring/preview", json={"answers": {"perf_quality": 2}}, headers=admin_headers
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["ready"] is False
        assert data["answered"] == 1
        assert data["total_questions"] == 10
        assert "perf_quality" not in data["missing_question_ids"]
        assert data["performance"] is None

    def test_complete_preview(self, client, admin_headers):
        response = client.post(f"{API}/scoring/preview", json={"answers": answers_all(1)}, headers=admin_headers)
        data = response.json()
        assert data["ready"] is True
        assert (data["x_sum"], data["y_sum"]) == (15, 15)
        assert data["category"]["id"] == "core"

    def test_preview_persists_nothing(self, client, admin_headers):
        client.post(f"{API}/scoring/preview", json={"answers": answers_all(2)}, headers=admin_headers)
        assert client.get(f"{API}/assessments/mine", headers=admin_headers).json()["total"] == 0

    def test_unknown_question(self, client, admin_headers):
        response = client.post(f"{API}/scoring/preview", json={"answers": {"typo": 1}}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["details"] == {"question_id": "typo"}

    def test_value_out_of_range(self, client, admin_headers):
        response = client.post(f"{API}/scoring/preview", json={"answers": {"perf_quality": 7}}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Answer values must be between 0 and 3"

    @pytest.mark.parametrize("value", [True, "2"])
    def test_non_integer_answer_rejected(self, client, admin_headers, value):
        answers = answers_all(1)
        answers["perf_quality"] = value
        response = client.post(f"{API}/scoring/preview", json={"answers": answers}, headers=admin_headers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Answer values must be integers"

    def test_boolean_answer_not_submitted(self, client, admin_headers, create_employee):
        employee = create_employee()
        answers = answers_all(1)
        answers["val_promo"] = False
        response = submit(client, admin_headers, employee["id"], answers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert client.get(f"{API}/results", headers=admin_headers).json()["total"] == 0


# ASSESSMENTS


class TestAssessments:
    """Tests for /api/v1/assessments endpoints."""

    def test_submit(self, client, create_user, create_employee):
        rater, rater_headers = create_user()
        employee = create_employee()
        response = submit(client, rater_headers, employee["id"], answers_all(2))
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["user_id"] == rater["id"]
        assert (data["performance"], data["potential"]) == (2, 2)
        assert data["answers"] == answers_all(2)

    def test_incomplete_is_rejected_and_not_stored(self, client, admin_headers, create_employee):
        employee = create_employee()
        answers = answers_all(1)
        del answers["val_retention"]
        response = submit(client, admin_headers, employee["id"], answers)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert error_code(response) == "ASSESSMENT_INCOMPLETE"
        assert client.get(f"{API}/results", headers=admin_headers).json()["total"] == 0

    def test_answer_not_an_option(self, client, admin_headers, create_employee):
        employee = create_employee()
        answers = answers_all(1)
        answers["perf_quality"] = 3
        response = submit(client, admin_headers, employee["id"], answers)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unknown_employee(self, client, admin_headers):
        response = submit(client, admin_headers, "missing", answers_all(1))
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert error_code(response) == "EMPLOYEE_NOT_FOUND"

    def test_cannot_assess_self(self, client, admin_headers, create_user):
        manager, manager_headers = create_user()
        own = next(
            e for e in client.get(f"{API}/employees", headers=admin_headers).json()["items"]
            if e["linked_user_id"] == manager["id"]
        )
        response = submit(client, manager_headers, own["id"], answers_all(1))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cannot_assess_other_company(self, client, admin_headers, create_user, create_employee):
        other = client.post(f"{API}/companies", json={"name": "Other"}, headers=admin_headers).json()
        outsider = create_employee(company_id=other["id"])
        _, manager_headers = create_user()
        response = submit(client, manager_headers, outsider["id"], answers_all(1))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_resubmission_supersedes(self, client, create_user, create_employee):
        _, rater_headers = create_user()
        employee = create_employee()
        first = submit(client, rater_headers, employee["id"], answers_all(0)).json()
        second = submit(client, rater_headers, employee["id"], answers_all(2)).json()

        mine = client.get(f"{API}/assessments/mine", headers=rater_headers).json()
        assert mine["total"] == 1
        assert mine["items"][0]["assessment_id"] == second["id"]
        assert mine["items"][0]["assessment_id"] != first["id"]
        assert mine["items"][0]["category"]["id"] == "star"

    def test_delete(self, client, admin_headers, create_employee):
        employee = create_employee()
        created = submit(client, admin_headers, employee["id"], answers_all(1)).json()
        response = client.delete(f"{API}/assessments/{created['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_204_NO_CONTENT
        response = client.delete(f"{API}/assessments/{created['id']}", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_manager_cannot_delete(self, client, create_user, create_employee):
        _, manager_headers = create_user()
        employee = create_employee()
        created = submit(client, manager_headers, employee["id"], answers_all(1)).json()
        response = client.delete(f"{API}/assessments/{created['id']}", headers=manager_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


# RESULTS


class TestResults:
    """Tests for GET /api/v1/results."""

    @pytest.fixture
    def two_raters(self, create_user, create_employee):
        rater_a = create_user()
        rater_b = create_user()
        employee = create_employee(name="Rated Twice")
        return rater_a, rater_b, employee

    def test_aggregates_across_raters(self, client, admin_headers, two_raters):
        (_, headers_a), (_, headers_b), employee = two_raters
        submit(client, headers_a, employee["id"], answers_all(1))
        submit(client, headers_b, employee["id"], answers_all(2))

        data = client.get(f"{API}/results", headers=admin_headers).json()
        assert data["total"] == 1
        result = data["items"][0]
        assert result["id"] == employee["id"]
        assert result["name"] == "Rated Twice"
        # mean(1, 2) = 1.5 rounds half up
        assert (result["performance"], result["potential"]) == (2, 2)
        assert result["assessment_count"] == 2
        assert result["category"]["id"] == "star"
        assert result["risk_flag"] is False

    def test_risk_flag(self, client, admin_headers, two_raters, leaving_star_answers):
        (_, headers_a), (_, headers_b), employee = two_raters
        submit(client, headers_a, employee["id"], leaving_star_answers)
        submit(client, headers_b, employee["id"], answers_all(2))

        result = client.get(f"{API}/results", headers=admin_headers).json()["items"][0]
        assert result["risk_flag"] is True

    def test_rater_filter_passes_through(self, client, admin_headers, two_raters):
        (rater_a, headers_a), (_, headers_b), employee = two_raters
        created = submit(client, headers_a, employee["id"], answers_all(0)).json()
        submit(client, headers_b, employee["id"], answers_all(2))

        data = client.get(f"{API}/results", params={"rater_id": rater_a["id"]}, headers=admin_headers).json()
        assert data["total"] == 1
        item = data["items"][0]
        assert item["assessment_id"] == created["id"]
        assert item["assessed_by_user_id"] == rater_a["id"]
        assert item["answers"] == answers_all(0)
        assert (item["performance"], item["potential"]) == (0, 0)

    def test_company_filter_uses_rater_company(self, client, admin_headers, create_user, create_employee):
        other = client.post(f"{API}/companies", json={"name": "Other"}, headers=admin_headers).json()
        employee = create_employee(company_id=other["id"])
        submit(client, admin_headers, employee["id"], answers_all(1))

        by_admin_company = client.get(
            f"{API}/results", params={"company_id": other["id"]}, headers=admin_headers
        ).json()
        # The admin rater belongs to the default company
        assert by_admin_company["total"] == 0

    def test_director_sees_own_company_only(self, client, admin_headers, create_user, create_employee):
        other = client.post(f"{API}/companies", json={"name": "Other"}, headers=admin_headers).json()
        outside_rater, outside_headers = create_user(company_id=other["id"])
        outsider = create_employee(company_id=other["id"])
        submit(client, outside_headers, outsider["id"], answers_all(1))

        _, director_headers = create_user(role="director")
        data = client.get(
            f"{API}/results", params={"company_id": other["id"]}, headers=director_headers
        ).json()
        assert data["total"] == 0

    def test_manager_forbidden(self, client, create_user):
        _, manager_headers = create_user()
        assert client.get(f"{API}/results", headers=manager_headers).status_code == status.HTTP_403_FORBIDDEN

    def test_empty(self, client, admin_headers):
        assert client.get(f"{API}/results", headers=admin_headers).json() == {"items": [], "total": 0}


# STORE FAILURES


class TestStoreFailures:
    """Tests for document store errors surfacing as 503."""

    def test_corrupt_store_returns_503(self, client, admin_headers, store):
        store.path.write_text("{broken", encoding="utf-8")
        response = client.get(f"{API}/companies", headers=admin_headers)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["error_code"] == "STORE_UNAVAILABLE"

    def test_non_object_store_returns_503(self, client, admin_headers, store):
        store.path.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")
        response = client.get(f"{API}/questions", headers=admin_headers)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


# DEVELOPMENT ADVICE


class TestDevelopmentAdvice:
    """Tests for POST /api/v1/assessments/{id}/advice."""

    @pytest.fixture
    def gemini(self):
        """Advice service over a mocked Gemini client."""
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text="1. Mentor a junior"))
        app.dependency_overrides[get_advice_service] = lambda: AdviceService(client=client)
        return client

    @pytest.fixture
    def assessed(self, client, create_user, create_employee):
        rater, rater_headers = create_user()
        employee = create_employee(name="Dana Seitkali", position="Engineer")
        created = submit(client, rater_headers, employee["id"], answers_all(2)).json()
        return rater, rater_headers, employee, created

    def test_generates_and_stores(self, client, admin_headers, gemini, assessed):
        _, rater_headers, employee, created = assessed
        response = client.post(f"{API}/assessments/{created['id']}/advice", headers=rater_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "assessment_id": created["id"],
            "employee_id": employee["id"],
            "advice": "1. Mentor a junior",
            "generated": True,
        }
        prompt = gemini.aio.models.generate_content.call_args.kwargs["contents"]
        assert "Dana Seitkali" in prompt
        assert "Future Leader" in prompt

        mine = client.get(f"{API}/assessments/mine", headers=rater_headers).json()["items"]
        assert mine[0]["ai_advice"] == "1. Mentor a junior"
        results = client.get(f"{API}/results", headers=admin_headers).json()["items"]
        assert results[0]["ai_advice"] == "1. Mentor a junior"

    def test_placeholder_without_key_is_not_stored(self, client, assessed):
        _, rater_headers, _, created = assessed
        response = client.post(f"{API}/assessments/{created['id']}/advice", headers=rater_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["generated"] is False
        assert response.json()["advice"] == MSG_NOT_CONFIGURED
        mine = client.get(f"{API}/assessments/mine", headers=rater_headers).json()["items"]
        assert mine[0]["ai_advice"] is None

    def test_other_manager_forbidden(self, client, create_user, gemini, assessed):
        _, _, _, created = assessed
        _, other_headers = create_user()
        response = client.post(f"{API}/assessments/{created['id']}/advice", headers=other_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        gemini.aio.models.generate_content.assert_not_called()

    def test_director_of_same_company_allowed(self, client, create_user, gemini, assessed):
        _, _, _, created = assessed
        _, director_headers = create_user(role="director")
        response = client.post(f"{API}/assessments/{created['id']}/advice", headers=director_headers)
        assert response.status_code == status.HTTP_200_OK

    def test_unknown_assessment(self, client, admin_headers, gemini):
        response = client.post(f"{API}/assessments/missing/advice", headers=admin_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert error_code(response) == "ASSESSMENT_NOT_FOUND"

    def test_resubmission_clears_advice(self, client, gemini, assessed):
        _, rater_headers, employee, created = assessed
        client.post(f"{API}/assessments/{created['id']}/advice", headers=rater_headers)
        submit(client, rater_headers, employee["id"], answers_all(1))
        mine = client.get(f"{API}/assessments/mine", headers=rater_headers).json()["items"]
        assert mine[0]["ai_advice"] is None
