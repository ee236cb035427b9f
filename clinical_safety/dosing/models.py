"""
Data records for the dosing engine.

All records are frozen; each one is built per call and never mutated.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from clinical_safety.constants import (
    CONTRAINDICATED,
    DEFAULT_SERUM_CREATININE,
    SUBSTITUTE_PREFIX,
    Ascites,
    ChildPughClass,
    Encephalopathy,
    RenalTier,
    Sex,
)


@dataclass(frozen=True)
class PatientParameters:
    """Raw patient parameters supplied by the caller."""
    age: float  # years
    weight: float  # kg
    height: float  # cm
    sex: Union[Sex, str]
    serum_creatinine: Optional[float] = None  # mg/dL

    @property
    def effective_serum_creatinine(self) -> float:
        """Serum creatinine with the 1.0 mg/dL default applied."""
        if self.serum_creatinine is None:
            return DEFAULT_SERUM_CREATININE
        return self.serum_creatinine

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE


@dataclass(frozen=True)
class Anthropometrics:
    bsa: float  # m²
    ibw: float  # kg
    abw: float  # kg

    def to_dict(self) -> Dict:
        return {"bsa": self.bsa, "ibw": self.ibw, "abw": self.abw}


@dataclass(frozen=True)
class CKDStage:
    stage: int
    description: str


@dataclass(frozen=True)
class RenalFunctionAssessment:
    creatinine_clearance: float  # mL/min
    egfr: float  # mL/min/1.73m²
    ckd_stage: int
    ckd_description: str
    renal_adjustment_required: bool

    def to_dict(self) -> Dict:
        return {
            "creatinine_clearance": self.creatinine_clearance,
            "egfr": self.egfr,
            "ckd_stage": self.ckd_stage,
            "ckd_description": self.ckd_description,
            "renal_adjustment_required": self.renal_adjustment_required,
        }


@dataclass(frozen=True)
class ChildPughInput:
    bilirubin: float  # mg/dL
    albumin: float  # g/dL
    inr: float
    ascites: Union[Ascites, str] = Ascites.NONE
    encephalopathy: Union[Encephalopathy, str] = Encephalopathy.NONE


@dataclass(frozen=True)
class ChildPughResult:
    child_pugh_score: int
    child_pugh_class: ChildPughClass
    hepatic_adjustment_required: bool

    def to_dict(self) -> Dict:
        return {
            "child_pugh_score": self.child_pugh_score,
            "child_pugh_class": self.child_pugh_class.value,
            "hepatic_adjustment_required": self.hepatic_adjustment_required,
        }


@dataclass(frozen=True)
class DoseAdjustment:
    """Renal-adjusted dosing recommendation for one drug."""
    drug: str  # caller's spelling
    standard_dose: str
    adjusted_dose: str
    adjustment_reason: str
    frequency: str
    renal_tier: RenalTier
    warnings: Tuple[str, ...] = ()
    monitoring_required: Tuple[str, ...] = ()

    @property
    def is_contraindicated(self) -> bool:
        return self.adjusted_dose == CONTRAINDICATED

    @property
    def is_substitution(self) -> bool:
        return self.adjusted_dose.startswith(SUBSTITUTE_PREFIX)

    @property
    def is_adjusted(self) -> bool:
        return self.adjusted_dose != self.standard_dose

    def to_dict(self) -> Dict:
        return {
            "drug": self.drug,
            "standard_dose": self.standard_dose,
            "adjusted_dose": self.adjusted_dose,
            "adjustment_reason": self.adjustment_reason,
            "frequency": self.frequency,
            "renal_tier": self.renal_tier.value,
            "warnings": list(self.warnings),
            "monitoring_required": list(self.monitoring_required),
        }


@dataclass(frozen=True)
class PatientSnapshot:
    """Renal and anthropometric values echoed in a dosing report."""
    creatinine_clearance: float
    egfr: float
    ckd_stage: int
    bsa: float
    ibw: float
    abw: float

    def to_dict(self) -> Dict:
        return {
            "creatinine_clearance": self.creatinine_clearance,
            "egfr": self.egfr,
            "ckd_stage": self.ckd_stage,
            "bsa": self.bsa,
            "ibw": self.ibw,
            "abw": self.abw,
        }


@dataclass(frozen=True)
class DosingReport:
    patient_parameters: PatientSnapshot
    renal_function: RenalFunctionAssessment
    dosing_recommendations: Tuple[DoseAdjustment, ...] = ()
    general_warnings: Tuple[str, ...] = ()
    hepatic_function: Optional[ChildPughResult] = field(default=None)

    def to_dict(self) -> Dict:
        return {
            "patient_parameters": self.patient_parameters.to_dict(),
            "renal_function": self.renal_function.to_dict(),
            "hepatic_function": self.hepatic_function.to_dict() if self.hepatic_function else None,
            "dosing_recommendations": [rec.to_dict() for rec in self.dosing_recommendations],
            "general_warnings": list(self.general_warnings),
        }
