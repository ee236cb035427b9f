"""
Renal-adjusted dose lookup and weight/BSA based dose calculators.
"""
import logging
from typing import List, Optional, Tuple

from clinical_safety.constants import CONTRAINDICATED, SUBSTITUTE_PREFIX, RenalTier
from clinical_safety.dosing.anthropometrics import calculate_abw, calculate_bsa
from clinical_safety.dosing.guidelines import DEFAULT_RENAL_DOSING_TABLE, RenalDosingTable
from clinical_safety.dosing.models import (
    DoseAdjustment,
    PatientParameters,
    RenalFunctionAssessment,
)
from clinical_safety.dosing.renal import get_renal_tier
from clinical_safety.numeric import format_number, round_half_away

logger = logging.getLogger(__name__)

# Dose-string token -> display frequency. First match wins; anything else,
# sentinels included, reads as daily.
FREQUENCY_TOKENS: Tuple[Tuple[str, str], ...] = (
    ("BID", "Twice daily"),
    ("TID", "Three times daily"),
    ("Q12", "Every 12 hours"),
    ("Q24", "Every 24 hours"),
)
DEFAULT_FREQUENCY = "Daily"

TIER_MONITORING = {
    RenalTier.DIALYSIS: "Time dose around dialysis sessions",
    RenalTier.ESRD: "Close monitoring of renal function",
    RenalTier.SEVERE: "Monitor for drug accumulation",
    RenalTier.MODERATE: "Monitor renal function every 3-6 months",
}

TIER_REASON_SUFFIX = {
    RenalTier.ESRD: "ESRD dosing",
    RenalTier.SEVERE: "severe renal impairment",
    RenalTier.MODERATE: "moderate renal impairment",
    RenalTier.MILD: "mild renal impairment",
}


def derive_frequency(dose: str) -> str:
    """Display frequency derived from tokens in a dose string."""
    for token, frequency in FREQUENCY_TOKENS:
        if token in dose:
            return frequency
    return DEFAULT_FREQUENCY


def _adjustment_reason(tier: RenalTier, crcl: float) -> str:
    if tier == RenalTier.DIALYSIS:
        return "Patient on dialysis - dose adjusted per dialysis guidelines"
    if tier == RenalTier.NORMAL:
        return "Normal renal function - standard dosing"
    return f"CrCl {format_number(crcl)} mL/min - {TIER_REASON_SUFFIX[tier]}"


class RenalDoseCalculator:
    """
    Looks up renal-adjusted doses in an injected guideline table.

    Tier selection, in priority order: dialysis (always overrides CrCl),
    ESRD (CrCl < 15), severe (< 30), moderate (< 50), mild (< 80), normal.
    """

    def __init__(self, table: Optional[RenalDosingTable] = None):
        self.table = table if table is not None else DEFAULT_RENAL_DOSING_TABLE

    def get_renal_adjusted_dose(
        self,
        drug_name: str,
        renal_function: RenalFunctionAssessment,
        on_dialysis: bool = False,
    ) -> Optional[DoseAdjustment]:
        """
        Renal-adjusted recommendation for one drug.

        Args:
            drug_name: Drug name in any casing; echoed back unchanged
            renal_function: Assessment from ``assess_renal_function``
            on_dialysis: Dialysis status, overrides CrCl-based tiers

        Returns:
            DoseAdjustment, or None when the drug has no guideline
        """
        guideline = self.table.get(drug_name)
        if guideline is None:
            logger.debug(f"No renal dosing guideline for '{drug_name}'")
            return None

        crcl = renal_function.creatinine_clearance
        tier = get_renal_tier(crcl, on_dialysis)
        adjusted_dose = guideline.dose_for(tier)

        warnings: List[str] = []
        monitoring: List[str] = []

        if tier in TIER_MONITORING:
            monitoring.append(TIER_MONITORING[tier])

        if adjusted_dose == CONTRAINDICATED:
            warnings.append(
                f"{drug_name} is CONTRAINDICATED in this patient due to renal impairment"
            )
        elif adjusted_dose.startswith(SUBSTITUTE_PREFIX):
            substitute = adjusted_dose[len(SUBSTITUTE_PREFIX):].lower()
            warnings.append(
                f"{drug_name} should not be used at this level of renal function - use {substitute} instead"
            )

        logger.debug(f"{drug_name}: tier={tier.value} dose='{adjusted_dose}'")

        return DoseAdjustment(
            drug=drug_name,
            standard_dose=guideline.normal,
            adjusted_dose=adjusted_dose,
            adjustment_reason=_adjustment_reason(tier, crcl),
            frequency=derive_frequency(adjusted_dose),
            renal_tier=tier,
            warnings=tuple(warnings),
            monitoring_required=tuple(monitoring),
        )


def calculate_weight_based_dose(
    dose_per_kg: float,
    params: PatientParameters,
    use_abw: bool = False,
) -> float:
    """dose_per_kg × weight (ABW when ``use_abw``), rounded to 1 decimal."""
    weight = calculate_abw(params) if use_abw else params.weight
    return round_half_away(dose_per_kg * weight, 1)


def calculate_bsa_based_dose(dose_per_m2: float, params: PatientParameters) -> float:
    """dose_per_m2 × BSA, rounded to 1 decimal."""
    return round_half_away(dose_per_m2 * calculate_bsa(params), 1)


_default_calculator = RenalDoseCalculator()


def get_renal_adjusted_dose(
    drug_name: str,
    renal_function: RenalFunctionAssessment,
    on_dialysis: bool = False,
) -> Optional[DoseAdjustment]:
    """Module-level shortcut using the reference guideline table."""
    return _default_calculator.get_renal_adjusted_dose(drug_name, renal_function, on_dialysis)
