"""
Company Repository - Nine-Box Talent Review
ninebox/repositories/company_repository.py

Data access layer for Company entity operations.
"""

import logging
from typing import Any, Dict, List, Optional

from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CompanyRepository(BaseRepository):
    """Repository for Company CRUD operations."""

    COLLECTION = "companies"

    def get_all(self) -> List[Dict[str, Any]]:
        return [self._to_dict(c) for c in self.get_all_records()]

    def get_by_id(self, company_id: str) -> Optional[Dict[str, Any]]:
        record = self.get_record(company_id)
        return self._to_dict(record) if record else None

    def check_duplicate(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """
        Check if another company already uses this name (case-insensitive).
        """
        name_lower = name.strip().lower()
        return any(
            c["name"].strip().lower() == name_lower and c["id"] != exclude_id
            for c in self.get_all_records()
        )

    def create(self, name: str, disable_user_add_employees: bool = False) -> Dict[str, Any]:
        """
        Create a new company and return its data.
        """
        company = {
            "id": self.new_id("comp-"),
            "name": name,
            "disable_user_add_employees": disable_user_add_employees,
        }
        with self.store.transaction() as document:
            if any(c["name"].strip().lower() == name.strip().lower() for c in document["companies"]):
                raise DuplicateEntityException(f"Company '{name}' already exists")
            document["companies"].append(company)

        logger.info(f"Created company {company['id']} ({name})")
        return self._to_dict(company)

    def update(
        self,
        company_id: str,
        name: Optional[str] = None,
        disable_user_add_employees: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Update a company's fields and return updated data.
        """
        with self.store.transaction() as document:
            company = self.find(document, company_id)
            if company is None:
                raise EntityNotFoundException("Company", company_id)
            if name is not None:
                company["name"] = name
            if disable_user_add_employees is not None:
                company["disable_user_add_employees"] = disable_user_add_employees
            updated = dict(company)

        return self._to_dict(updated)

    def delete_cascade(self, company_id: str) -> Dict[str, int]:
        """
        Delete a company with its users, employees, and every assessment made
        by those users or about those employees.

        Returns:
            Number of removed records per collection
        """
        with self.store.transaction() as document:
            if self.find(document, company_id) is None:
                raise EntityNotFoundException("Company", company_id)

            user_ids = {u["id"] for u in document["users"] if u.get("company_id") == company_id}
            employee_ids = {e["id"] for e in document["employees"] if e.get("company_id") == company_id}

            before = {name: len(document[name]) for name in ("users", "employees", "assessments")}

            document["companies"] = [c for c in document["companies"] if c["id"] != company_id]
            document["users"] = [u for u in document["users"] if u["id"] not in user_ids]
            document["employees"] = [e for e in document["employees"] if e["id"] not in employee_ids]
            document["assessments"] = [
                a for a in document["assessments"]
                if a.get("user_id") not in user_ids and a.get("employee_id") not in employee_ids
            ]

            removed = {name: before[name] - len(document[name]) for name in before}

        logger.info(f"Deleted company {company_id}: {removed}")
        return removed

    def _to_dict(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": record["id"],
            "name": record["name"],
            "disable_user_add_employees": bool(record.get("disable_user_add_employees", False)),
        }
