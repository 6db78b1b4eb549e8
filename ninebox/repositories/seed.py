"""
Seed Data - Nine-Box Talent Review
ninebox/repositories/seed.py

Initial document for a fresh store: one company, its administrator, the
default question bank and the default thresholds.
"""

from typing import Any, Dict

from ninebox.config import Settings
from ninebox.core.security import hash_password
from ninebox.scoring.question_bank import default_questions

DEFAULT_COMPANY_ID = "company-mides"
DEFAULT_ADMIN_ID = "admin-1"


def build_default_document(settings: Settings) -> Dict[str, Any]:
    return {
        "users": [
            {
                "id": DEFAULT_ADMIN_ID,
                "email": settings.DEFAULT_ADMIN_EMAIL.lower(),
                "name": settings.DEFAULT_ADMIN_NAME,
                "password_hash": hash_password(settings.DEFAULT_ADMIN_PASSWORD.get_secret_value()),
                "role": "admin",
                "company_id": DEFAULT_COMPANY_ID,
            }
        ],
        "employees": [],
        "assessments": [],
        "companies": [
            {
                "id": DEFAULT_COMPANY_ID,
                "name": settings.DEFAULT_COMPANY_NAME,
                "disable_user_add_employees": False,
            }
        ],
        "questions": [q.model_dump(mode="json") for q in default_questions()],
        "settings": {"thresholds": settings.default_thresholds},
    }
