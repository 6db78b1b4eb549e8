"""
Assessment Repository - Nine-Box Talent Review
ninebox/repositories/assessment_repository.py

Data access layer for Assessment entity operations.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ninebox.core.exceptions import EntityNotFoundException
from ninebox.repositories.base import BaseRepository
from ninebox.scoring.engine import ScoringResult

logger = logging.getLogger(__name__)


class AssessmentRepository(BaseRepository):
    """Repository for Assessment CRUD operations."""

    COLLECTION = "assessments"

    def replace_for_rater(
        self,
        user_id: str,
        employee_id: str,
        result: ScoringResult,
    ) -> Dict[str, Any]:
        """
        Store a finalized assessment, superseding any earlier assessment of the
        same employee by the same rater.

        Args:
            user_id: Rater who submitted the assessment
            employee_id: Assessed employee profile
            result: Finalized scoring result

        Returns:
            Created assessment dict
        """
        assessment = {
            "id": self.new_id(),
            "employee_id": employee_id,
            "user_id": user_id,
            "performance": int(result.performance),
            "potential": int(result.potential),
            "answers": dict(result.answers),
            "x_sum": result.x_sum,
            "y_sum": result.y_sum,
            "date": self.now_iso(),
        }

        with self.store.transaction() as document:
            if self.find(document, employee_id, "employees") is None:
                raise EntityNotFoundException("Employee", employee_id)

            before = len(document["assessments"])
            document["assessments"] = [
                a for a in document["assessments"]
                if not (a.get("user_id") == user_id and a.get("employee_id") == employee_id)
            ]
            superseded = before - len(document["assessments"])
            document["assessments"].append(assessment)

        if superseded:
            logger.info(f"Assessment of {employee_id} by {user_id} superseded {superseded} earlier record(s)")
        logger.info(f"Stored assessment {assessment['id']} for employee {employee_id}")
        return self._to_dict(assessment)

    def get_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        record = self.get_record(assessment_id)
        return self._to_dict(record) if record else None

    def get_all(
        self,
        rater_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        rater_ids: Optional[Iterable[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Retrieve assessments in stored order with optional filters.

        Args:
            rater_id: Only assessments submitted by this user
            employee_id: Only assessments about this employee
            rater_ids: Only assessments submitted by any of these users

        Returns:
            List of assessment dicts
        """
        assessments = self.get_all_records()

        if rater_id:
            assessments = [a for a in assessments if a.get("user_id") == rater_id]
        if employee_id:
            assessments = [a for a in assessments if a.get("employee_id") == employee_id]
        if rater_ids is not None:
            allowed = set(rater_ids)
            assessments = [a for a in assessments if a.get("user_id") in allowed]

        return [self._to_dict(a) for a in assessments]

    def set_advice(self, assessment_id: str, advice: str) -> Dict[str, Any]:
        """Attach generated development advice to an assessment."""
        with self.store.transaction() as document:
            record = self.find(document, assessment_id)
            if record is None:
                raise EntityNotFoundException("Assessment", assessment_id)
            record["ai_advice"] = advice
            updated = dict(record)
        logger.info(f"Stored development advice for assessment {assessment_id}")
        return self._to_dict(updated)

    def delete(self, assessment_id: str) -> None:
        with self.store.transaction() as document:
            if self.find(document, assessment_id) is None:
                raise EntityNotFoundException("Assessment", assessment_id)
            document["assessments"] = [a for a in document["assessments"] if a["id"] != assessment_id]
        logger.info(f"Deleted assessment {assessment_id}")

    def _to_dict(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": record["id"],
            "employee_id": record["employee_id"],
            "user_id": record["user_id"],
            "performance": int(record["performance"]),
            "potential": int(record["potential"]),
            "answers": {k: int(v) for k, v in (record.get("answers") or {}).items()},
            "x_sum": record.get("x_sum"),
            "y_sum": record.get("y_sum"),
            "date": self.normalize_timestamp(record["date"]),
            "ai_advice": record.get("ai_advice"),
        }
