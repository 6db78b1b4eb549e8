"""
scoring/grid.py - Nine-box grid categories

Static 3×3 table indexed [potential][performance]:

                 perf 0          perf 1          perf 2
    pot 2        enigma          growth          star
    pot 1        inconsistent    core            high-impact
    pot 0        risk            effective       expert
"""

from dataclasses import dataclass
from typing import List, Tuple

from ninebox.models.enumerations import Level


@dataclass(frozen=True)
class GridCategory:
    id: str
    name: str
    description: str
    guidance: str
    performance: Level
    potential: Level


GRID: Tuple[Tuple[GridCategory, ...], ...] = (
    # Low potential
    (
        GridCategory(
            id="risk",
            name="Attrition Risk",
            description="Low performance and low potential.",
            guidance="Agree on a time-boxed improvement plan; consider a role change or exit if it fails.",
            performance=Level.LOW,
            potential=Level.LOW,
        ),
        GridCategory(
            id="effective",
            name="Effective Employee",
            description="Handles the current role well. A dependable contributor.",
            guidance="Keep engaged with clear goals and recognition; develop depth in the current role.",
            performance=Level.MODERATE,
            potential=Level.LOW,
        ),
        GridCategory(
            id="expert",
            name="Trusted Professional",
            description="An expert in their field with limited appetite or room to grow.",
            guidance="Retain and motivate; use as a mentor and keeper of know-how.",
            performance=Level.HIGH,
            potential=Level.LOW,
        ),
    ),
    # Moderate potential
    (
        GridCategory(
            id="inconsistent",
            name="Inconsistent Player",
            description="Shows potential but results are weak.",
            guidance="Coach closely and check role fit; a move may unlock performance.",
            performance=Level.LOW,
            potential=Level.MODERATE,
        ),
        GridCategory(
            id="core",
            name="Core Player",
            description="Reliable employee with room to grow.",
            guidance="Stretch with new responsibilities and targeted training.",
            performance=Level.MODERATE,
            potential=Level.MODERATE,
        ),
        GridCategory(
            id="high-impact",
            name="High Impact Performer",
            description="Excellent results; can take on more responsibility.",
            guidance="Widen the scope of the role and prepare a growth path.",
            performance=Level.HIGH,
            potential=Level.MODERATE,
        ),
    ),
    # High potential
    (
        GridCategory(
            id="enigma",
            name="Enigma",
            description="High talent, low results.",
            guidance="Find out what blocks delivery: workload, manager fit or motivation.",
            performance=Level.LOW,
            potential=Level.HIGH,
        ),
        GridCategory(
            id="growth",
            name="Rising Star",
            description="Learns fast and delivers good results.",
            guidance="Prepare for promotion; assign a sponsor and stretch projects.",
            performance=Level.MODERATE,
            potential=Level.HIGH,
        ),
        GridCategory(
            id="star",
            name="Future Leader",
            description="Top talent.",
            guidance="Enroll in leadership development and put a retention plan in place.",
            performance=Level.HIGH,
            potential=Level.HIGH,
        ),
    ),
)


def get_category(performance: int, potential: int) -> GridCategory:
    """
    Look up the box for a (performance, potential) pair.

    Raises:
        ValueError: if either level is outside 0-2
    """
    performance, potential = Level(performance), Level(potential)
    return GRID[potential][performance]


def all_categories() -> List[GridCategory]:
    """Every box, low potential row first, low performance column first."""
    return [category for row in GRID for category in row]
