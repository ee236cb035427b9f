"""
Anthropometric quantities used for dosing.

- Body Surface Area (Mosteller)
- Ideal Body Weight (Devine)
- Adjusted Body Weight (obese patients only)
"""
from clinical_safety.constants import Sex, WeightThresholds
from clinical_safety.dosing.models import Anthropometrics, PatientParameters
from clinical_safety.numeric import ieee_sqrt, round_half_away

CM_PER_INCH = 2.54


def calculate_bsa(params: PatientParameters) -> float:
    """BSA = sqrt((height_cm × weight_kg) / 3600), rounded to 2 decimals."""
    bsa = ieee_sqrt((params.height * params.weight) / 3600)
    return round_half_away(bsa, 2)


def calculate_ibw(params: PatientParameters) -> float:
    """
    Ideal body weight on height in inches.

    Male / other: 50 + 2.3 × (inches - 60)
    Female:       45.5 + 2.3 × (inches - 60)

    Never negative; rounded to 1 decimal.
    """
    height_inches = params.height / CM_PER_INCH

    if params.sex == Sex.FEMALE:
        ibw = 45.5 + 2.3 * (height_inches - 60)
    else:
        ibw = 50 + 2.3 * (height_inches - 60)

    return round_half_away(max(ibw, 0), 1)


def calculate_abw(params: PatientParameters) -> float:
    """
    Adjusted body weight.

    Actual weight unless the patient is more than 20% above IBW, in which case
    IBW + 0.4 × (actual - IBW), rounded to 1 decimal.
    """
    ibw = calculate_ibw(params)

    if params.weight > ibw * WeightThresholds.ABW_APPLIES_ABOVE:
        abw = ibw + WeightThresholds.ABW_CORRECTION_FACTOR * (params.weight - ibw)
        return round_half_away(abw, 1)

    return params.weight


def calculate_anthropometrics(params: PatientParameters) -> Anthropometrics:
    return Anthropometrics(
        bsa=calculate_bsa(params),
        ibw=calculate_ibw(params),
        abw=calculate_abw(params),
    )
