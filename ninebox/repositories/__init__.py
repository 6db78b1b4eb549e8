"""
Repositories Package - Nine-Box Talent Review
ninebox/repositories/__init__.py

Data access layer over the JSON document store.
"""

from ninebox.repositories.base import BaseRepository, JsonDocumentStore
from ninebox.repositories.assessment_repository import AssessmentRepository
from ninebox.repositories.company_repository import CompanyRepository
from ninebox.repositories.employee_repository import EmployeeRepository
from ninebox.repositories.question_repository import QuestionRepository
from ninebox.repositories.settings_repository import SettingsRepository
from ninebox.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "JsonDocumentStore",
    "AssessmentRepository",
    "CompanyRepository",
    "EmployeeRepository",
    "QuestionRepository",
    "SettingsRepository",
    "UserRepository",
]
