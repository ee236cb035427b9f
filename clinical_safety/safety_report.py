"""
Treatment safety report.

Runs the dosing report and the allergy check over the same medication list
and folds their findings into a single verdict for the prescriber.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from clinical_safety.allergy.engine import AllergyChecker, AllergyInput, get_default_checker
from clinical_safety.allergy.models import AllergyCheckResult
from clinical_safety.dosing.calculator import RenalDoseCalculator
from clinical_safety.dosing.models import ChildPughInput, DosingReport, PatientParameters
from clinical_safety.dosing.report import generate_dosing_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreatmentSafetyReport:
    dosing: DosingReport
    allergy: AllergyCheckResult
    critical_alerts: Tuple[str, ...]
    action_required: bool
    summary: str

    def to_dict(self) -> Dict:
        return {
            "dosing": self.dosing.to_dict(),
            "allergy": self.allergy.to_dict(),
            "critical_alerts": list(self.critical_alerts),
            "action_required": self.action_required,
            "summary": self.summary,
        }


def _collect_critical_alerts(dosing: DosingReport, allergy: AllergyCheckResult) -> List[str]:
    critical = [alert.message for alert in allergy.high_severity_alerts]
    for rec in dosing.dosing_recommendations:
        if rec.is_contraindicated or rec.is_substitution:
            critical.extend(rec.warnings)
    return critical


def _generate_summary(dosing: DosingReport, allergy: AllergyCheckResult) -> str:
    """Generate summary text."""
    high_alerts = len(allergy.high_severity_alerts)
    contraindicated = sum(1 for r in dosing.dosing_recommendations if r.is_contraindicated)
    substitutions = sum(1 for r in dosing.dosing_recommendations if r.is_substitution)
    adjusted = sum(1 for r in dosing.dosing_recommendations if r.is_adjusted)

    if high_alerts > 0:
        return f"CRITICAL: {high_alerts} high-severity allergy alert(s). Do not prescribe until reviewed."
    elif contraindicated > 0:
        return f"WARNING: {contraindicated} medication(s) are contraindicated at this renal function. Review with physician."
    elif substitutions > 0:
        return f"WARNING: {substitutions} medication(s) require substitution at this renal function."
    elif adjusted > 0 or allergy.alerts:
        return (
            f"CAUTION: {adjusted} medication(s) need renal dose adjustment; "
            f"{len(allergy.alerts)} lower-severity allergy alert(s) to review."
        )
    else:
        return "All medications appear safe at standard doses for this patient."


def generate_treatment_safety_report(
    params: PatientParameters,
    medications: Sequence[str],
    allergies: Sequence[AllergyInput] = (),
    on_dialysis: bool = False,
    hepatic: Optional[ChildPughInput] = None,
    calculator: Optional[RenalDoseCalculator] = None,
    checker: Optional[AllergyChecker] = None,
) -> TreatmentSafetyReport:
    """
    Combined dosing and allergy review for one medication list.

    Critical alerts list high-severity allergy messages first, then the
    warnings of contraindicated or substituted drugs.
    """
    checker = checker or get_default_checker()

    dosing = generate_dosing_report(
        params,
        medications,
        on_dialysis=on_dialysis,
        hepatic=hepatic,
        calculator=calculator,
    )
    allergy = checker.check_allergies(allergies, medications)

    critical = _collect_critical_alerts(dosing, allergy)
    logger.debug(f"Treatment safety report: {len(critical)} critical alert(s)")

    return TreatmentSafetyReport(
        dosing=dosing,
        allergy=allergy,
        critical_alerts=tuple(critical),
        action_required=bool(critical),
        summary=_generate_summary(dosing, allergy),
    )
