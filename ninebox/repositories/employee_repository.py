"""
Employee Repository - Nine-Box Talent Review
ninebox/repositories/employee_repository.py

Data access layer for employee profiles (assessment subjects).
"""

import logging
from typing import Any, Dict, List, Optional

from ninebox.core.exceptions import EntityNotFoundException
from ninebox.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class EmployeeRepository(BaseRepository):
    """Repository for employee profile operations."""

    COLLECTION = "employees"

    def get_all(self, company_id: Optional[str] = None) -> List[Dict[str, Any]]:
        employees = self.get_all_records()
        if company_id:
            employees = [e for e in employees if e.get("company_id") == company_id]
        return [self._to_dict(e) for e in employees]

    def get_by_id(self, employee_id: str) -> Optional[Dict[str, Any]]:
        record = self.get_record(employee_id)
        return self._to_dict(record) if record else None

    def get_available_for_rater(self, rater_id: str, company_id: str) -> List[Dict[str, Any]]:
        """
        Profiles of the rater's company that the rater has not assessed yet,
        excluding the rater's own profile.
        """
        document = self.store.read()
        assessed = {
            a["employee_id"] for a in document["assessments"] if a.get("user_id") == rater_id
        }
        return [
            self._to_dict(e)
            for e in document["employees"]
            if e.get("company_id") == company_id
            and e.get("linked_user_id") != rater_id
            and e["id"] not in assessed
        ]

    def create(
        self,
        name: str,
        position: str,
        company_id: str,
        created_by_user_id: str,
    ) -> Dict[str, Any]:
        """
        Create an employee profile and return its data.
        """
        employee = {
            "id": self.new_id(),
            "name": name,
            "position": position,
            "company_id": company_id,
            "created_by_user_id": created_by_user_id,
            "linked_user_id": None,
        }
        with self.store.transaction() as document:
            if self.find(document, company_id, "companies") is None:
                raise EntityNotFoundException("Company", company_id)
            document["employees"].append(employee)

        logger.info(f"Created employee {employee['id']} in company {company_id}")
        return self._to_dict(employee)

    def delete_cascade(self, employee_id: str) -> int:
        """
        Delete a profile and every assessment about it.

        Returns:
            Number of removed assessments
        """
        with self.store.transaction() as document:
            if self.find(document, employee_id) is None:
                raise EntityNotFoundException("Employee", employee_id)
            before = len(document["assessments"])
            document["employees"] = [e for e in document["employees"] if e["id"] != employee_id]
            document["assessments"] = [
                a for a in document["assessments"] if a.get("employee_id") != employee_id
            ]
            removed = before - len(document["assessments"])

        logger.info(f"Deleted employee {employee_id} and {removed} assessment(s)")
        return removed

    def _to_dict(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": record["id"],
            "name": record["name"],
            "position": record.get("position", ""),
            "company_id": record["company_id"],
            "created_by_user_id": record.get("created_by_user_id", ""),
            "linked_user_id": record.get("linked_user_id"),
        }
