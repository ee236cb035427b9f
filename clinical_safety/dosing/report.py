"""
Dosing report aggregation.

Renal assessment and anthropometrics are computed once per report, then
every proposed drug is mapped through the renal dose lookup. Drugs without
a guideline are skipped.
"""
import logging
from typing import List, Optional, Sequence

from clinical_safety.constants import AgeThresholds, RenalThresholds, WeightThresholds
from clinical_safety.dosing.anthropometrics import calculate_anthropometrics
from clinical_safety.dosing.calculator import RenalDoseCalculator
from clinical_safety.dosing.hepatic import calculate_child_pugh
from clinical_safety.dosing.models import (
    ChildPughInput,
    ChildPughResult,
    DosingReport,
    PatientParameters,
    PatientSnapshot,
    RenalFunctionAssessment,
)
from clinical_safety.dosing.renal import assess_renal_function

logger = logging.getLogger(__name__)

GERIATRIC_WARNING = "Geriatric patient - consider lower starting doses and slower titration"
VERY_ELDERLY_WARNING = "Very elderly patient - heightened risk of adverse drug reactions"
OBESE_WARNING = "Obese patient - consider using adjusted body weight for dosing"
UNDERWEIGHT_WARNING = "Underweight patient - consider lower doses"
NEPHROTOXIC_WARNING = "Severe renal impairment - avoid nephrotoxic medications"
NEPHROLOGY_WARNING = "Consider nephrology consultation"


def _general_warnings(
    params: PatientParameters,
    ibw: float,
    renal_function: RenalFunctionAssessment,
    hepatic_function: Optional[ChildPughResult],
) -> List[str]:
    warnings = []

    # Age
    if params.age >= AgeThresholds.GERIATRIC_FROM:
        warnings.append(GERIATRIC_WARNING)
    if params.age >= AgeThresholds.VERY_ELDERLY_FROM:
        warnings.append(VERY_ELDERLY_WARNING)

    # Weight
    if params.weight > ibw * WeightThresholds.OBESE_ABOVE:
        warnings.append(OBESE_WARNING)
    if params.weight < ibw * WeightThresholds.UNDERWEIGHT_BELOW:
        warnings.append(UNDERWEIGHT_WARNING)

    # Renal
    if renal_function.ckd_stage >= RenalThresholds.NEPHROTOXIC_WARNING_STAGE:
        warnings.append(NEPHROTOXIC_WARNING)
        warnings.append(NEPHROLOGY_WARNING)

    # Hepatic (only when a Child-Pugh input was supplied)
    if hepatic_function is not None and hepatic_function.hepatic_adjustment_required:
        warnings.append(
            f"Child-Pugh class {hepatic_function.child_pugh_class.value} "
            f"(score {hepatic_function.child_pugh_score}) - "
            "review hepatically cleared medications for dose reduction"
        )

    return warnings


def generate_dosing_report(
    params: PatientParameters,
    medications: Sequence[str],
    on_dialysis: bool = False,
    hepatic: Optional[ChildPughInput] = None,
    calculator: Optional[RenalDoseCalculator] = None,
) -> DosingReport:
    """
    Build a dosing report for a patient and a list of proposed drugs.

    Args:
        params: Patient parameters
        medications: Proposed drug names, in display order
        on_dialysis: Dialysis status passed to every lookup
        hepatic: Optional Child-Pugh input; adds hepatic result and advisory
        calculator: Renal dose calculator (reference table by default)

    Returns:
        DosingReport
    """
    calculator = calculator or RenalDoseCalculator()

    renal_function = assess_renal_function(params)
    anthropometrics = calculate_anthropometrics(params)
    hepatic_function = calculate_child_pugh(hepatic) if hepatic is not None else None

    recommendations = []
    for med in medications:
        recommendation = calculator.get_renal_adjusted_dose(med, renal_function, on_dialysis)
        if recommendation:
            recommendations.append(recommendation)

    skipped = len(medications) - len(recommendations)
    if skipped:
        logger.debug(f"{skipped} medication(s) without renal dosing guideline skipped")

    return DosingReport(
        patient_parameters=PatientSnapshot(
            creatinine_clearance=renal_function.creatinine_clearance,
            egfr=renal_function.egfr,
            ckd_stage=renal_function.ckd_stage,
            bsa=anthropometrics.bsa,
            ibw=anthropometrics.ibw,
            abw=anthropometrics.abw,
        ),
        renal_function=renal_function,
        dosing_recommendations=tuple(recommendations),
        general_warnings=tuple(
            _general_warnings(params, anthropometrics.ibw, renal_function, hepatic_function)
        ),
        hepatic_function=hepatic_function,
    )
