"""
User Repository - Nine-Box Talent Review
ninebox/repositories/user_repository.py

Data access layer for User entity operations. Every user except the seeded
administrator owns a linked employee profile so colleagues can assess them.
"""

import logging
from typing import Any, Dict, List, Optional

from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.models.enumerations import Role
from ninebox.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_USER_POSITION = "Manager"


class UserRepository(BaseRepository):
    """Repository for User CRUD operations."""

    COLLECTION = "users"

    def get_all(
        self,
        company_id: Optional[str] = None,
        exclude_admins: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        List users, optionally narrowed to one company and/or without admins.
        """
        users = self.get_all_records()
        if company_id:
            users = [u for u in users if u.get("company_id") == company_id]
        if exclude_admins:
            users = [u for u in users if u.get("role") != Role.ADMIN.value]
        return [self._to_dict(u) for u in users]

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        record = self.get_record(user_id)
        return self._to_dict(record) if record else None

    def get_credentials(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a user with its password hash, matching e-mail case-insensitively.
        """
        email_lower = email.strip().lower()
        for user in self.get_all_records():
            if user["email"].lower() == email_lower:
                return user
        return None

    def create(
        self,
        email: str,
        name: str,
        password_hash: str,
        role: Role,
        company_id: str,
        created_by_user_id: str,
        position: str = DEFAULT_USER_POSITION,
        employee_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a user together with its linked employee profile.

        Args:
            email: Login e-mail (unique)
            name: Display name
            password_hash: bcrypt hash
            role: Role of the new user
            company_id: Company the user belongs to
            created_by_user_id: Creator, recorded on the employee profile
            position: Job title of a newly created profile
            employee_id: Link this existing profile instead of creating one

        Returns:
            Created user dict
        """
        user_id = self.new_id()
        user = {
            "id": user_id,
            "email": email.strip().lower(),
            "name": name,
            "password_hash": password_hash,
            "role": Role(role).value,
            "company_id": company_id,
        }

        with self.store.transaction() as document:
            if any(u["email"].lower() == user["email"] for u in document["users"]):
                raise DuplicateEntityException(f"User with e-mail {email} already exists")
            if self.find(document, company_id, "companies") is None:
                raise EntityNotFoundException("Company", company_id)

            if employee_id is not None:
                profile = self.find(document, employee_id, "employees")
                if profile is None:
                    raise EntityNotFoundException("Employee", employee_id)
                if profile.get("linked_user_id"):
                    raise DuplicateEntityException(f"Employee {employee_id} already has a user account")
                profile["linked_user_id"] = user_id
            else:
                document["employees"].append(
                    {
                        "id": self.new_id(),
                        "name": name,
                        "position": position,
                        "company_id": company_id,
                        "created_by_user_id": created_by_user_id,
                        "linked_user_id": user_id,
                    }
                )
            document["users"].append(user)

        logger.info(f"Created {user['role']} {user_id} in company {company_id}")
        return self._to_dict(user)

    def delete_cascade(self, user_id: str) -> Dict[str, int]:
        """
        Delete a user, the assessments they made, their linked employee profile
        and the assessments about that profile.
        """
        with self.store.transaction() as document:
            if self.find(document, user_id) is None:
                raise EntityNotFoundException("User", user_id)

            linked_ids = {e["id"] for e in document["employees"] if e.get("linked_user_id") == user_id}
            before = {name: len(document[name]) for name in ("users", "employees", "assessments")}

            document["users"] = [u for u in document["users"] if u["id"] != user_id]
            document["employees"] = [e for e in document["employees"] if e["id"] not in linked_ids]
            document["assessments"] = [
                a for a in document["assessments"]
                if a.get("user_id") != user_id and a.get("employee_id") not in linked_ids
            ]

            removed = {name: before[name] - len(document[name]) for name in before}

        logger.info(f"Deleted user {user_id}: {removed}")
        return removed

    def _to_dict(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Public view of a user (no password hash)."""
        return {
            "id": record["id"],
            "email": record["email"],
            "name": record["name"],
            "role": Role(record["role"]),
            "company_id": record["company_id"],
        }
