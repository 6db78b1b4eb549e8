"""
scoring/ - Nine-box scoring engine

Modules:
    utils.py          - Decimal rounding helpers (round-half-up)
    weights.py        - Per-answer weight and axis resolution
    engine.py         - Axis sums, threshold classification, finalization
    aggregation.py    - Multi-rater averaging and retention-risk flag
    grid.py           - Static 3×3 grid categories
    question_bank.py  - Default questionnaire seeded into a new store
"""
