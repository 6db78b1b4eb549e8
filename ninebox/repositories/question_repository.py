"""
Question Repository - Nine-Box Talent Review
ninebox/repositories/question_repository.py

Data access layer for the active question bank. Records are kept in bank
order; scoring iterates them in that order.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ninebox.core.exceptions import DuplicateEntityException, EntityNotFoundException
from ninebox.models.question import Question
from ninebox.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class QuestionRepository(BaseRepository):
    """Repository for question bank operations."""

    COLLECTION = "questions"

    def get_all(self) -> List[Question]:
        return [Question.model_validate(q) for q in self.get_all_records()]

    def get_by_id(self, question_id: str) -> Optional[Question]:
        record = self.get_record(question_id)
        return Question.model_validate(record) if record else None

    def create(self, data: Dict[str, Any]) -> Question:
        """
        Append a question to the bank.

        Args:
            data: Validated question fields; ``id`` may be None

        Returns:
            Stored question
        """
        question = Question.model_validate({**data, "id": data.get("id") or f"q-{uuid4().hex[:12]}"})

        with self.store.transaction() as document:
            if self.find(document, question.id) is not None:
                raise DuplicateEntityException(f"Question '{question.id}' already exists")
            document["questions"].append(question.model_dump(mode="json"))

        logger.info(f"Added question {question.id} ({question.category.value})")
        return question

    def update(self, question_id: str, data: Dict[str, Any]) -> Question:
        """
        Replace a question in place, keeping its id and position.
        """
        question = Question.model_validate({**data, "id": question_id})

        with self.store.transaction() as document:
            records = document["questions"]
            for index, record in enumerate(records):
                if record.get("id") == question_id:
                    records[index] = question.model_dump(mode="json")
                    break
            else:
                raise EntityNotFoundException("Question", question_id)

        logger.info(f"Updated question {question_id}")
        return question

    def delete(self, question_id: str) -> None:
        with self.store.transaction() as document:
            if self.find(document, question_id) is None:
                raise EntityNotFoundException("Question", question_id)
            document["questions"] = [q for q in document["questions"] if q["id"] != question_id]
        logger.info(f"Deleted question {question_id}")
