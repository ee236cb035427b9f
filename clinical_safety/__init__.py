"""
Clinical Safety Rules Engine

Deterministic, rule-based decision support for prescribing:
- Renal and hepatic function assessment (Cockcroft-Gault, CKD-EPI 2021, Child-Pugh)
- Renal-adjusted dose recommendations from an injectable guideline table
- Allergy cross-reactivity and excipient screening
- Combined treatment safety report
"""

from clinical_safety.allergy import Allergy, AllergyChecker, check_allergies, is_drug_safe_for_patient
from clinical_safety.dosing import (
    ChildPughInput,
    PatientParameters,
    RenalDoseCalculator,
    generate_dosing_report,
    get_renal_adjusted_dose,
)
from clinical_safety.safety_report import TreatmentSafetyReport, generate_treatment_safety_report

__version__ = "1.0.0"

__all__ = [
    "Allergy",
    "AllergyChecker",
    "ChildPughInput",
    "PatientParameters",
    "RenalDoseCalculator",
    "TreatmentSafetyReport",
    "check_allergies",
    "generate_dosing_report",
    "generate_treatment_safety_report",
    "get_renal_adjusted_dose",
    "is_drug_safe_for_patient",
]
