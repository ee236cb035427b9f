"""
Allergy Cross-Reactivity Engine.

For every declared allergen against every proposed drug:
1. Direct match (allergen and drug name match)
2. Cross-reactivity groups the allergen belongs to
   - drug in the group's cross-reactive list -> cross-reactive (group severity)
   - drug is another primary allergen of the group -> class-based (always high)
3. Excipient reminders for the allergen, independent of the drug list

Alerts are deduplicated on (allergen, drug, alert type), keeping the first
occurrence. The result is safe unless some alert has high severity.
"""
import logging
from functools import lru_cache
from typing import List, Optional, Sequence, Union

from clinical_safety.allergy.knowledge_base import AllergyKnowledgeBase, default_knowledge_base
from clinical_safety.allergy.matching import BaseMatcher, SubstringMatcher, get_matcher
from clinical_safety.allergy.models import (
    Allergy,
    AllergyAlert,
    AllergyCheckResult,
    CrossReactivityGroup,
)
from clinical_safety.config import get_settings
from clinical_safety.constants import AlertSeverity, AlertType

logger = logging.getLogger(__name__)

AllergyInput = Union[Allergy, str]


def _allergen_name(allergy: AllergyInput) -> str:
    return allergy if isinstance(allergy, str) else allergy.allergen


def deduplicate_alerts(alerts: Sequence[AllergyAlert]) -> List[AllergyAlert]:
    """Drop repeated (allergen, drug, alert type) keys, keeping first-seen order."""
    seen = set()
    unique = []
    for alert in alerts:
        if alert.dedup_key in seen:
            continue
        seen.add(alert.dedup_key)
        unique.append(alert)
    return unique


class AllergyChecker:
    """
    Checks proposed drugs against declared allergies.

    The knowledge base and matcher are injected; both default to the
    reference set and the substring matcher.
    """

    def __init__(
        self,
        knowledge_base: Optional[AllergyKnowledgeBase] = None,
        matcher: Optional[BaseMatcher] = None,
    ):
        self.knowledge_base = knowledge_base or default_knowledge_base()
        self.matcher = matcher or SubstringMatcher()

    # ==================== Rule passes ====================

    def _direct_matches(self, allergen: str, drugs: Sequence[str]) -> List[AllergyAlert]:
        alerts = []
        for drug in drugs:
            if self.matcher.matches(allergen, drug):
                alerts.append(AllergyAlert(
                    allergen=allergen,
                    drug=drug,
                    alert_type=AlertType.DIRECT,
                    severity=AlertSeverity.HIGH,
                    cross_reactivity_rate="100%",
                    message=f"DIRECT ALLERGY: Patient is allergic to {allergen}; {drug} is the same or closely related.",
                    recommendation="Do NOT prescribe. Select an alternative from a different drug class.",
                ))
        return alerts

    def _cross_reactivity_matches(self, allergen: str, drugs: Sequence[str]) -> List[AllergyAlert]:
        alerts = []
        for group in self.knowledge_base.groups:
            if not self._allergen_in_group(allergen, group):
                continue

            logger.debug(f"Allergen '{allergen}' belongs to group '{group.group_name}'")

            for drug in drugs:
                is_cross_reactive = any(
                    self.matcher.matches(crd, drug) for crd in group.cross_reactive_drugs
                )
                is_class_based = any(
                    self.matcher.matches(pa, drug) and not self.matcher.matches(pa, allergen)
                    for pa in group.primary_allergens
                )

                if is_cross_reactive:
                    alerts.append(AllergyAlert(
                        allergen=allergen,
                        drug=drug,
                        alert_type=AlertType.CROSS_REACTIVE,
                        severity=group.severity,
                        cross_reactivity_rate=group.cross_reactivity_rate,
                        message=(
                            f"CROSS-REACTIVITY ({group.group_name}): Patient allergic to {allergen}. "
                            f"{drug} has {group.cross_reactivity_rate} cross-reactivity risk."
                        ),
                        recommendation=group.recommendation,
                    ))

                if is_class_based:
                    alerts.append(AllergyAlert(
                        allergen=allergen,
                        drug=drug,
                        alert_type=AlertType.CLASS_BASED,
                        severity=AlertSeverity.HIGH,
                        cross_reactivity_rate="Same class",
                        message=(
                            f"CLASS ALERT ({group.group_name}): Patient allergic to {allergen}. "
                            f"{drug} is in the same pharmacological class."
                        ),
                        recommendation=f"Avoid all drugs in the {group.group_name} class. {group.recommendation}",
                    ))
        return alerts

    def _excipient_matches(self, allergen: str) -> List[AllergyAlert]:
        alerts = []
        for excipient in self.knowledge_base.excipients:
            if self.matcher.matches(excipient.allergen, allergen):
                alerts.append(AllergyAlert(
                    allergen=allergen,
                    drug=", ".join(excipient.drugs_containing),
                    alert_type=AlertType.EXCIPIENT,
                    severity=AlertSeverity.MODERATE,
                    cross_reactivity_rate="Varies",
                    message=f"EXCIPIENT ALERT: Patient allergic to {allergen}. {excipient.message}",
                    recommendation="Check inactive ingredients of all prescribed medications and verify no cross-contamination.",
                ))
        return alerts

    def _allergen_in_group(self, allergen: str, group: CrossReactivityGroup) -> bool:
        return any(self.matcher.matches(pa, allergen) for pa in group.primary_allergens)

    # ==================== Public API ====================

    def check_allergies(
        self,
        allergies: Sequence[AllergyInput],
        drugs: Sequence[str],
    ) -> AllergyCheckResult:
        """
        Check a list of proposed drugs against a patient's allergies.

        Args:
            allergies: Allergy records or plain allergen names
            drugs: Proposed drug names

        Returns:
            AllergyCheckResult with deduplicated alerts
        """
        allergen_names = [_allergen_name(a) for a in allergies]
        normalized_allergens = [a.lower().strip() for a in allergen_names]
        normalized_drugs = [d.lower().strip() for d in drugs]

        alerts: List[AllergyAlert] = []
        for allergen in normalized_allergens:
            alerts.extend(self._direct_matches(allergen, normalized_drugs))
            alerts.extend(self._cross_reactivity_matches(allergen, normalized_drugs))
            alerts.extend(self._excipient_matches(allergen))

        unique = deduplicate_alerts(alerts)
        has_high = any(a.severity == AlertSeverity.HIGH for a in unique)

        if unique:
            logger.debug(
                f"Allergy check: {len(unique)} alert(s) for {len(allergen_names)} allergen(s) "
                f"x {len(drugs)} drug(s)"
            )

        return AllergyCheckResult(
            safe=not has_high,
            alerts=tuple(unique),
            checked_drugs=tuple(drugs),
            checked_allergens=tuple(allergen_names),
        )

    def is_drug_safe_for_patient(
        self,
        drug_name: str,
        allergies: Sequence[AllergyInput],
    ) -> AllergyCheckResult:
        """Single-drug convenience wrapper around ``check_allergies``."""
        return self.check_allergies(allergies, [drug_name])

    def get_cross_reactivity_info(self, allergen: str) -> List[CrossReactivityGroup]:
        """Reference groups the allergen belongs to, for display."""
        lower = allergen.lower().strip()
        return [g for g in self.knowledge_base.groups if self._allergen_in_group(lower, g)]


@lru_cache()
def get_default_checker() -> AllergyChecker:
    """
    Checker over the reference knowledge base, built once per process.

    Uses the matcher named by the ALLERGY_MATCHER setting.
    """
    return AllergyChecker(matcher=get_matcher(get_settings().ALLERGY_MATCHER))


def check_allergies(allergies: Sequence[AllergyInput], drugs: Sequence[str]) -> AllergyCheckResult:
    return get_default_checker().check_allergies(allergies, drugs)


def is_drug_safe_for_patient(drug_name: str, allergies: Sequence[AllergyInput]) -> AllergyCheckResult:
    return get_default_checker().is_drug_safe_for_patient(drug_name, allergies)


def get_cross_reactivity_info(allergen: str) -> List[CrossReactivityGroup]:
    return get_default_checker().get_cross_reactivity_info(allergen)
