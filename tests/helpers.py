# tests/helpers.py

"""
Plain helpers shared by test modules (fixtures live in conftest.py).
"""

from ninebox.models.enumerations import QuestionCategory
from ninebox.models.question import Question
from ninebox.scoring.question_bank import DEFAULT_QUESTIONS

DEFAULT_QUESTION_IDS = [q["id"] for q in DEFAULT_QUESTIONS]


def answers_all(value: int) -> dict:
    """Answer every default question with the same option value."""
    return {qid: value for qid in DEFAULT_QUESTION_IDS}


def make_question(qid, category=QuestionCategory.PERFORMANCE, axis=None, weights=None, values=(0, 1, 2)):
    """Build a question with optional explicit per-value weights."""
    weights = weights or {}
    return Question(
        id=qid,
        category=category,
        axis=axis,
        question_text=f"Question {qid}?",
        options=[
            {"value": v, "label": f"Option {v}", "weight": weights.get(v)}
            for v in values
        ],
    )
