"""Data models for the allergy cross-reactivity engine."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from clinical_safety.constants import AlertSeverity, AlertType


@dataclass(frozen=True)
class Allergy:
    """A declared patient allergy."""
    allergen: str
    reaction: Optional[str] = None


@dataclass(frozen=True)
class CrossReactivityGroup:
    """Reference group: allergy to any primary allergen implies risk for the listed drugs."""
    group_name: str
    primary_allergens: Tuple[str, ...]
    cross_reactive_drugs: Tuple[str, ...]
    cross_reactivity_rate: str
    severity: AlertSeverity
    recommendation: str

    def to_dict(self) -> Dict:
        return {
            "group_name": self.group_name,
            "primary_allergens": list(self.primary_allergens),
            "cross_reactive_drugs": list(self.cross_reactive_drugs),
            "cross_reactivity_rate": self.cross_reactivity_rate,
            "severity": self.severity.value,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class ExcipientMapping:
    """Inactive ingredient and the formulations that commonly contain it."""
    allergen: str
    drugs_containing: Tuple[str, ...]
    message: str


@dataclass(frozen=True)
class AllergyAlert:
    allergen: str
    drug: str
    alert_type: AlertType
    severity: AlertSeverity
    cross_reactivity_rate: str
    message: str
    recommendation: str

    @property
    def dedup_key(self) -> Tuple[str, str, AlertType]:
        return (self.allergen, self.drug, self.alert_type)

    def to_dict(self) -> Dict:
        return {
            "allergen": self.allergen,
            "drug": self.drug,
            "alert_type": self.alert_type.value,
            "severity": self.severity.value,
            "cross_reactivity_rate": self.cross_reactivity_rate,
            "message": self.message,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class AllergyCheckResult:
    safe: bool
    alerts: Tuple[AllergyAlert, ...]
    checked_drugs: Tuple[str, ...]
    checked_allergens: Tuple[str, ...]

    @property
    def high_severity_alerts(self) -> Tuple[AllergyAlert, ...]:
        return tuple(a for a in self.alerts if a.severity == AlertSeverity.HIGH)

    def to_dict(self) -> Dict:
        return {
            "safe": self.safe,
            "alerts": [a.to_dict() for a in self.alerts],
            "checked_drugs": list(self.checked_drugs),
            "checked_allergens": list(self.checked_allergens),
        }
