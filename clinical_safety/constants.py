"""
Engine-wide constants.
"""
from enum import Enum


class Sex(str, Enum):
    """Patient sex as used by the renal and body-weight formulas."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Ascites(str, Enum):
    NONE = "none"
    MILD = "mild"
    MODERATE = "moderate"


class Encephalopathy(str, Enum):
    NONE = "none"
    GRADE_1_2 = "grade1-2"
    GRADE_3_4 = "grade3-4"


class ChildPughClass(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class RenalTier(str, Enum):
    """Dose-table column selected from CrCl and dialysis status."""
    NORMAL = "normal"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    ESRD = "esrd"
    DIALYSIS = "dialysis"


class AlertType(str, Enum):
    """Allergy alert categories."""
    DIRECT = "direct"
    CROSS_REACTIVE = "cross-reactive"
    CLASS_BASED = "class-based"
    EXCIPIENT = "excipient"


class AlertSeverity(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


DEFAULT_SERUM_CREATININE = 1.0  # mg/dL


# Renal thresholds
class RenalThresholds:
    """CrCl / eGFR cut-offs (mL/min and mL/min/1.73m²)."""
    ADJUSTMENT_CRCL_BELOW = 50
    ADJUSTMENT_EGFR_BELOW = 60

    # Dose tiers, by CrCl
    ESRD_BELOW = 15
    SEVERE_BELOW = 30
    MODERATE_BELOW = 50
    MILD_BELOW = 80

    # CKD stages, by eGFR (lower bound inclusive)
    STAGE_1_FROM = 90
    STAGE_2_FROM = 60
    STAGE_3_FROM = 30
    STAGE_4_FROM = 15

    NEPHROTOXIC_WARNING_STAGE = 4


# Body-weight thresholds, as multiples of ideal body weight
class WeightThresholds:
    ABW_APPLIES_ABOVE = 1.2
    OBESE_ABOVE = 1.3
    UNDERWEIGHT_BELOW = 0.8
    ABW_CORRECTION_FACTOR = 0.4


class AgeThresholds:
    GERIATRIC_FROM = 65
    VERY_ELDERLY_FROM = 80


# Dose-table sentinels
CONTRAINDICATED = "CONTRAINDICATED"
SUBSTITUTE_PREFIX = "USE "


# Error Codes
class ErrorCodes:
    """Standard error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RULE_TABLE_ERROR = "RULE_TABLE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
