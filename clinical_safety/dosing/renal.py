"""
Renal function assessment.

Creatinine clearance (Cockcroft-Gault) and eGFR (CKD-EPI 2021, race-free)
are independent estimators and are not reconciled with each other. CKD
stage is taken from eGFR alone; the adjustment flag considers both.
"""
import logging

from clinical_safety.constants import RenalThresholds, RenalTier
from clinical_safety.dosing.models import (
    CKDStage,
    PatientParameters,
    RenalFunctionAssessment,
)
from clinical_safety.numeric import ieee_divide, ieee_pow, round_half_away

logger = logging.getLogger(__name__)

# CKD-EPI 2021 constants
CKD_EPI_COEFFICIENT = 142
CKD_EPI_AGE_BASE = 0.9938
CKD_EPI_UPPER_EXPONENT = -1.200
CKD_EPI_FEMALE_FACTOR = 1.012
CKD_EPI_KAPPA = {"female": 0.7, "male": 0.9}
CKD_EPI_ALPHA = {"female": -0.241, "male": -0.302}

COCKCROFT_GAULT_FEMALE_FACTOR = 0.85

# Descending, lower bound inclusive
CKD_STAGES = (
    (RenalThresholds.STAGE_1_FROM, 1, "Normal or high kidney function"),
    (RenalThresholds.STAGE_2_FROM, 2, "Mild decrease in kidney function"),
    (RenalThresholds.STAGE_3_FROM, 3, "Moderate decrease in kidney function"),
    (RenalThresholds.STAGE_4_FROM, 4, "Severe decrease in kidney function"),
)
ESRD_STAGE = CKDStage(stage=5, description="Kidney failure (ESRD)")


def calculate_crcl(params: PatientParameters) -> float:
    """
    Creatinine clearance, Cockcroft-Gault.

    CrCl = ((140 - age) × weight) / (72 × SCr), × 0.85 for female sex.
    Floored at zero (ages above 140) and rounded to 1 decimal.
    """
    scr = params.effective_serum_creatinine
    crcl = ieee_divide((140 - params.age) * params.weight, 72 * scr)

    if params.is_female:
        crcl *= COCKCROFT_GAULT_FEMALE_FACTOR

    return round_half_away(max(crcl, 0), 1)


def calculate_egfr(params: PatientParameters) -> float:
    """eGFR, CKD-EPI 2021 creatinine equation without race. Rounded to 1 decimal."""
    scr = params.effective_serum_creatinine
    key = "female" if params.is_female else "male"
    kappa = CKD_EPI_KAPPA[key]
    alpha = CKD_EPI_ALPHA[key]

    scr_kappa_ratio = scr / kappa
    min_term = min(scr_kappa_ratio, 1)
    max_term = max(scr_kappa_ratio, 1)

    egfr = (
        CKD_EPI_COEFFICIENT
        * ieee_pow(min_term, alpha)
        * ieee_pow(max_term, CKD_EPI_UPPER_EXPONENT)
        * ieee_pow(CKD_EPI_AGE_BASE, params.age)
    )

    if params.is_female:
        egfr *= CKD_EPI_FEMALE_FACTOR

    return round_half_away(egfr, 1)


def get_ckd_stage(egfr: float) -> CKDStage:
    """Map eGFR to a CKD stage (1-5)."""
    for lower_bound, stage, description in CKD_STAGES:
        if egfr >= lower_bound:
            return CKDStage(stage=stage, description=description)
    return ESRD_STAGE


def assess_renal_function(params: PatientParameters) -> RenalFunctionAssessment:
    """Combine CrCl, eGFR and CKD stage into one assessment."""
    crcl = calculate_crcl(params)
    egfr = calculate_egfr(params)
    ckd = get_ckd_stage(egfr)

    return RenalFunctionAssessment(
        creatinine_clearance=crcl,
        egfr=egfr,
        ckd_stage=ckd.stage,
        ckd_description=ckd.description,
        renal_adjustment_required=(
            crcl < RenalThresholds.ADJUSTMENT_CRCL_BELOW
            or egfr < RenalThresholds.ADJUSTMENT_EGFR_BELOW
        ),
    )


def get_renal_tier(crcl: float, on_dialysis: bool = False) -> RenalTier:
    """Pick the dose-table column. Dialysis always overrides CrCl."""
    if on_dialysis:
        return RenalTier.DIALYSIS
    if crcl < RenalThresholds.ESRD_BELOW:
        return RenalTier.ESRD
    if crcl < RenalThresholds.SEVERE_BELOW:
        return RenalTier.SEVERE
    if crcl < RenalThresholds.MODERATE_BELOW:
        return RenalTier.MODERATE
    if crcl < RenalThresholds.MILD_BELOW:
        return RenalTier.MILD
    return RenalTier.NORMAL
