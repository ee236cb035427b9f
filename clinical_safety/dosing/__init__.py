"""
Dosing Engine

Patient parameters -> anthropometrics -> renal / hepatic assessment ->
renal-adjusted dose lookup -> dosing report.
"""

from clinical_safety.dosing.anthropometrics import (
    calculate_abw,
    calculate_anthropometrics,
    calculate_bsa,
    calculate_ibw,
)
from clinical_safety.dosing.calculator import (
    RenalDoseCalculator,
    calculate_bsa_based_dose,
    calculate_weight_based_dose,
    get_renal_adjusted_dose,
)
from clinical_safety.dosing.guidelines import (
    DEFAULT_RENAL_DOSING_TABLE,
    RenalDosingGuideline,
    RenalDosingTable,
)
from clinical_safety.dosing.hepatic import calculate_child_pugh
from clinical_safety.dosing.models import (
    Anthropometrics,
    ChildPughInput,
    ChildPughResult,
    DoseAdjustment,
    DosingReport,
    PatientParameters,
    RenalFunctionAssessment,
)
from clinical_safety.dosing.renal import (
    assess_renal_function,
    calculate_crcl,
    calculate_egfr,
    get_ckd_stage,
)
from clinical_safety.dosing.report import generate_dosing_report

__all__ = [
    "Anthropometrics",
    "ChildPughInput",
    "ChildPughResult",
    "DoseAdjustment",
    "DosingReport",
    "PatientParameters",
    "RenalFunctionAssessment",
    "RenalDoseCalculator",
    "RenalDosingGuideline",
    "RenalDosingTable",
    "DEFAULT_RENAL_DOSING_TABLE",
    "assess_renal_function",
    "calculate_abw",
    "calculate_anthropometrics",
    "calculate_bsa",
    "calculate_bsa_based_dose",
    "calculate_child_pugh",
    "calculate_crcl",
    "calculate_egfr",
    "calculate_ibw",
    "calculate_weight_based_dose",
    "generate_dosing_report",
    "get_ckd_stage",
    "get_renal_adjusted_dose",
]
