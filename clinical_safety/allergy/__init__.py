"""
Allergy Engine

Direct, cross-reactive, class-based and excipient alerts for a proposed
medication list, deduplicated and summarized into a safety verdict.
"""

from clinical_safety.allergy.engine import (
    AllergyChecker,
    check_allergies,
    deduplicate_alerts,
    get_cross_reactivity_info,
    get_default_checker,
    is_drug_safe_for_patient,
)
from clinical_safety.allergy.knowledge_base import (
    CROSS_REACTIVITY_GROUPS,
    EXCIPIENT_MAPPINGS,
    AllergyKnowledgeBase,
    default_knowledge_base,
)
from clinical_safety.allergy.matching import (
    BaseMatcher,
    SubstringMatcher,
    TokenMatcher,
    get_matcher,
    normalize,
)
from clinical_safety.allergy.models import (
    Allergy,
    AllergyAlert,
    AllergyCheckResult,
    CrossReactivityGroup,
    ExcipientMapping,
)

__all__ = [
    # Models
    "Allergy",
    "AllergyAlert",
    "AllergyCheckResult",
    "CrossReactivityGroup",
    "ExcipientMapping",
    # Knowledge base
    "CROSS_REACTIVITY_GROUPS",
    "EXCIPIENT_MAPPINGS",
    "AllergyKnowledgeBase",
    "default_knowledge_base",
    # Matching
    "BaseMatcher",
    "SubstringMatcher",
    "TokenMatcher",
    "get_matcher",
    "normalize",
    # Engine
    "AllergyChecker",
    "check_allergies",
    "deduplicate_alerts",
    "get_cross_reactivity_info",
    "get_default_checker",
    "is_drug_safe_for_patient",
]
