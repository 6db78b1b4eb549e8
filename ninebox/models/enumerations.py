from enum import Enum, IntEnum

class Role(str, Enum):
    ADMIN = "admin"          # Manages every company, the question bank and thresholds
    DIRECTOR = "director"    # Manages users and results of their own company
    MANAGER = "manager"      # Assesses employees of their own company

class QuestionCategory(str, Enum):
    PERFORMANCE = "performance"
    POTENTIAL = "potential"
    CALIBRATION = "calibration"

class Axis(str, Enum):
    X = "x"  # performance
    Y = "y"  # potential

class Level(IntEnum):
    LOW = 0
    MODERATE = 1
    HIGH = 2
