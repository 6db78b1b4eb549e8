"""
scoring/question_bank.py - Default questionnaire

Seeded into a fresh store. Standard items carry explicit weights 2 / 5 / 8 so
three of them span 6..24 per axis; calibration items use the calibration
defaults (-4 / 0 / +2). Two calibration items feed each axis, which places a
typical "all moderate" rater at 15 (moderate) under the default 13 / 20 cut
points.
"""

from typing import List

from ninebox.models.question import Question


def _standard_options(low: str, mid: str, high: str) -> List[dict]:
    return [
        {"value": 0, "label": "Low", "description": low, "weight": 2},
        {"value": 1, "label": "Medium", "description": mid, "weight": 5},
        {"value": 2, "label": "High", "description": high, "weight": 8},
    ]


DEFAULT_QUESTIONS: List[dict] = [
    # Performance
    {
        "id": "perf_quality",
        "category": "performance",
        "axis": "x",
        "title": "1. Quality of results",
        "question_text": "How often do you have to step in to fix mistakes or bring the employee's work up to standard?",
        "options": _standard_options(
            "Often. I regularly re-check the key steps.",
            "Sometimes. Complex tasks need my control, routine ones do not.",
            "Almost never. I fully trust the result.",
        ),
    },
    {
        "id": "perf_autonomy",
        "category": "performance",
        "axis": "x",
        "title": "2. Stability and autonomy",
        "question_text": "How does the employee act under uncertainty or without clear instructions?",
        "options": _standard_options(
            "Stops and waits for directions.",
            "Tries to solve it but often asks me to validate the decision.",
            "Finds a solution, proposes options and keeps moving toward the goal.",
        ),
    },
    {
        "id": "perf_efficiency",
        "category": "performance",
        "axis": "x",
        "title": "3. Efficiency",
        "question_text": "Compared with the ideal profile for the role, what is the employee's output?",
        "options": _standard_options(
            "Spends more time or resources than reasonably needed.",
            "Delivers steady results within the norm.",
            "Regularly does more or faster than expected by finding optimisations.",
        ),
    },
    # Potential
    {
        "id": "pot_agility",
        "category": "potential",
        "axis": "y",
        "title": "1. Learning agility",
        "question_text": "Think of the last time the employee had to master a completely new skill or tool. What happened?",
        "options": _standard_options(
            "Resisted or learned it slowly and with difficulty.",
            "Learned it at the usual pace.",
            "Learned it faster than others and started teaching colleagues.",
        ),
    },
    {
        "id": "pot_scale",
        "category": "potential",
        "axis": "y",
        "title": "2. Scale of thinking",
        "question_text": "When facing a problem, what level of solution does the employee propose?",
        "options": _standard_options(
            "Patches the symptom.",
            "Solves the problem within their own area.",
            "Finds the root cause and proposes a systemic fix across teams.",
        ),
    },
    {
        "id": "pot_drive",
        "category": "potential",
        "axis": "y",
        "title": "3. Ambition and drive",
        "question_text": "How does the employee react to ownerless tasks or hard problems outside their duties?",
        "options": _standard_options(
            "\"Not my job.\"",
            "Takes them on when asked.",
            "Spots the problem and takes ownership without reminders.",
        ),
    },
    # Calibration
    {
        "id": "val_risk",
        "category": "calibration",
        "axis": "x",
        "is_calibration": True,
        "title": "A. Irreplaceability test",
        "question_text": "The employee takes a month off at the peak of the season. How does it affect the team?",
        "options": [
            {"value": 0, "label": "High risk", "description": "Work stops or turns into chaos."},
            {"value": 1, "label": "Medium risk", "description": "Hard, but we will manage."},
            {"value": 2, "label": "Low risk", "description": "Processes barely slow down."},
        ],
    },
    {
        "id": "val_promo",
        "category": "calibration",
        "axis": "y",
        "is_calibration": True,
        "title": "B. Next step test",
        "question_text": "Could you hand this employee a task you usually do yourself?",
        "options": [
            {"value": 0, "label": "No", "description": "Too early."},
            {"value": 1, "label": "Partly", "description": "Under my supervision."},
            {"value": 2, "label": "Absolutely", "description": "They would do it as well as I do."},
        ],
    },
    {
        "id": "val_quit_feel",
        "category": "calibration",
        "axis": "x",
        "is_calibration": True,
        "title": "C. If they resigned",
        "question_text": "If the employee resigned tomorrow, how would you feel?",
        "options": [
            {"value": 0, "label": "Relieved", "description": "Their departure causes no problems."},
            {"value": 1, "label": "We'd replace them", "description": "The loss is not critical."},
            {"value": 2, "label": "It would hurt", "description": "Their departure creates visible risk."},
        ],
    },
    {
        "id": "val_retention",
        "category": "calibration",
        "axis": "y",
        "is_calibration": True,
        "title": "D. If they want to leave",
        "question_text": "A key employee says they are leaving. What do you do?",
        "options": [
            {"value": 0, "label": "Wish them luck", "description": "I will not try to keep them."},
            {"value": 1, "label": "Talk it over", "description": "I will try to find a compromise."},
            {"value": 2, "label": "Do everything to keep them", "description": "I am ready to act to retain them."},
            {"value": 3, "label": "They are already leaving", "description": "They have signalled they may go; retention is urgent."},
        ],
    },
]


def default_questions() -> List[Question]:
    """Fresh validated copies of the default bank."""
    return [Question.model_validate(q) for q in DEFAULT_QUESTIONS]
