"""
Allergy knowledge base: cross-reactivity groups and excipient mappings.

Clinical references:
- Penicillin-cephalosporin cross-reactivity is ~1-10%, carbapenems <1%
- Non-antibiotic sulfonamides lack the arylamine group (<2% cross-reactivity)
- Iodine allergy does not imply shellfish allergy (and vice versa)

Records are plain dicts so new drug classes are added as data. They are
validated and frozen once by ``AllergyKnowledgeBase.from_records``.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Tuple

from clinical_safety.allergy.models import CrossReactivityGroup, ExcipientMapping
from clinical_safety.constants import AlertSeverity
from clinical_safety.exceptions import RuleTableError

logger = logging.getLogger(__name__)


# =============================================================================
# Cross-reactivity groups
# =============================================================================

CROSS_REACTIVITY_GROUPS: List[Dict] = [
    {
        "group_name": "Penicillin / Beta-Lactam",
        "primary_allergens": ["penicillin", "amoxicillin", "ampicillin", "piperacillin", "nafcillin", "oxacillin", "dicloxacillin"],
        "cross_reactive_drugs": ["cephalexin", "cefazolin", "ceftriaxone", "cefepime", "cefuroxime", "cefdinir", "cefpodoxime", "imipenem", "meropenem", "ertapenem"],
        "cross_reactivity_rate": "1-10%",
        "severity": "high",
        "recommendation": "Cephalosporin use requires careful risk-benefit analysis. Graded challenge or skin testing recommended. Carbapenems generally safe (<1% cross-reactivity).",
    },
    {
        "group_name": "Sulfonamide Antibiotics",
        "primary_allergens": ["sulfa", "sulfamethoxazole", "trimethoprim-sulfamethoxazole", "bactrim", "septra", "sulfasalazine"],
        "cross_reactive_drugs": ["sulfadiazine", "dapsone", "sulfacetamide"],
        "cross_reactivity_rate": "10-15%",
        "severity": "moderate",
        "recommendation": "Non-antibiotic sulfonamides (furosemide, thiazides, celecoxib) have very low cross-reactivity. Antibiotic sulfonamides should be avoided.",
    },
    {
        "group_name": "Sulfonamide → Non-Antibiotic Sulfonamides",
        "primary_allergens": ["sulfa", "sulfamethoxazole", "bactrim"],
        "cross_reactive_drugs": ["furosemide", "hydrochlorothiazide", "celecoxib", "sumatriptan", "glipizide", "glyburide"],
        "cross_reactivity_rate": "<2%",
        "severity": "low",
        "recommendation": "Very low cross-reactivity. Generally safe to use with monitoring. True sulfonamide allergy is to the arylamine group absent in these drugs.",
    },
    {
        "group_name": "NSAID",
        "primary_allergens": ["aspirin", "ibuprofen", "naproxen", "nsaid", "ketorolac", "indomethacin", "piroxicam"],
        "cross_reactive_drugs": ["diclofenac", "meloxicam", "ketoprofen", "flurbiprofen", "etodolac", "nabumetone"],
        "cross_reactivity_rate": "20-30% (COX-1 mediated)",
        "severity": "high",
        "recommendation": "COX-2 selective NSAIDs (celecoxib) have low cross-reactivity (~4%). Acetaminophen is generally safe at standard doses.",
    },
    {
        "group_name": "Opioid",
        "primary_allergens": ["morphine", "codeine", "hydrocodone", "oxycodone"],
        "cross_reactive_drugs": ["hydromorphone", "oxymorphone", "tramadol", "fentanyl", "methadone", "meperidine", "tapentadol"],
        "cross_reactivity_rate": "Variable (structural similarity)",
        "severity": "moderate",
        "recommendation": "True opioid allergy is rare; most reactions are pseudo-allergic (histamine release). Fentanyl and methadone are structurally dissimilar and may be tolerated.",
    },
    {
        "group_name": "ACE Inhibitor Angioedema",
        "primary_allergens": ["lisinopril", "enalapril", "ramipril", "captopril", "benazepril", "fosinopril", "quinapril"],
        "cross_reactive_drugs": ["other ace inhibitors"],
        "cross_reactivity_rate": "Class-wide (~100%)",
        "severity": "high",
        "recommendation": "All ACE inhibitors are contraindicated after angioedema. ARBs have ~10% cross-reactivity for angioedema. Use with extreme caution or avoid.",
    },
    {
        "group_name": "Fluoroquinolone",
        "primary_allergens": ["ciprofloxacin", "levofloxacin", "moxifloxacin", "ofloxacin"],
        "cross_reactive_drugs": ["gemifloxacin", "delafloxacin", "norfloxacin"],
        "cross_reactivity_rate": "~10%",
        "severity": "moderate",
        "recommendation": "Cross-reactivity within fluoroquinolones is possible. True IgE-mediated allergy is uncommon. Alternatives: azithromycin, doxycycline, or amoxicillin depending on indication.",
    },
    {
        "group_name": "Local Anesthetics (Amide)",
        "primary_allergens": ["lidocaine", "bupivacaine", "mepivacaine", "prilocaine", "ropivacaine"],
        "cross_reactive_drugs": ["articaine", "etidocaine"],
        "cross_reactivity_rate": "<1% (usually preservative allergy)",
        "severity": "low",
        "recommendation": "True allergy to amide local anesthetics is extremely rare. Reactions are usually vasovagal or due to epinephrine/preservatives. Ester class (procaine) can be substituted.",
    },
    {
        "group_name": "Statin",
        "primary_allergens": ["atorvastatin", "simvastatin", "lovastatin", "rosuvastatin", "pravastatin", "fluvastatin"],
        "cross_reactive_drugs": ["pitavastatin"],
        "cross_reactivity_rate": "Variable (myopathy risk)",
        "severity": "moderate",
        "recommendation": "Statin intolerance (myopathy) varies by agent. Try a different statin (pravastatin/fluvastatin have lower myopathy risk), lower dose, or alternate-day dosing.",
    },
    {
        "group_name": "Iodinated Contrast Media",
        "primary_allergens": ["contrast dye", "iodine contrast", "iodinated contrast", "ct contrast", "iv contrast"],
        "cross_reactive_drugs": ["iopamidol", "iohexol", "iodixanol", "ioversol"],
        "cross_reactivity_rate": "~10-35% re-reaction",
        "severity": "high",
        "recommendation": "Premedicate with corticosteroids and antihistamines (Lasser protocol). Use non-ionic, low/iso-osmolar contrast. Iodine allergy ≠ shellfish allergy — this is a myth.",
    },
]


# =============================================================================
# Excipient (inactive ingredient) mappings
# =============================================================================

EXCIPIENT_MAPPINGS: List[Dict] = [
    {
        "allergen": "lactose",
        "drugs_containing": ["many oral tablets", "dry powder inhalers"],
        "message": "Lactose is a common excipient in tablets and DPIs. Check inactive ingredients.",
    },
    {
        "allergen": "gelatin",
        "drugs_containing": ["capsules", "vaccines"],
        "message": "Gelatin is found in many capsule shells and some vaccines (MMR, varicella, zoster).",
    },
    {
        "allergen": "egg",
        "drugs_containing": ["propofol", "influenza vaccine (some)", "yellow fever vaccine"],
        "message": "Egg protein may be present in certain vaccines and propofol (contains egg lecithin).",
    },
    {
        "allergen": "soy",
        "drugs_containing": ["propofol", "some parenteral nutrition"],
        "message": "Soy lecithin is in propofol and some IV lipid emulsions.",
    },
    {
        "allergen": "peanut",
        "drugs_containing": ["progesterone (some formulations)", "some compounded medications"],
        "message": "Peanut oil is rarely used as an excipient but check compounded formulations.",
    },
]


def _require(record: Dict, fields: Tuple[str, ...], kind: str) -> None:
    missing = [f for f in fields if not record.get(f)]
    if missing:
        label = record.get("group_name") or record.get("allergen") or "<unnamed>"
        raise RuleTableError(f"{kind} '{label}' is missing: {', '.join(missing)}")


def _build_group(record: Dict) -> CrossReactivityGroup:
    _require(
        record,
        ("group_name", "primary_allergens", "cross_reactive_drugs",
         "cross_reactivity_rate", "severity", "recommendation"),
        "Cross-reactivity group",
    )
    try:
        severity = AlertSeverity(record["severity"])
    except ValueError:
        raise RuleTableError(
            f"Cross-reactivity group '{record['group_name']}' has unknown severity '{record['severity']}'"
        ) from None

    return CrossReactivityGroup(
        group_name=record["group_name"],
        primary_allergens=tuple(record["primary_allergens"]),
        cross_reactive_drugs=tuple(record["cross_reactive_drugs"]),
        cross_reactivity_rate=record["cross_reactivity_rate"],
        severity=severity,
        recommendation=record["recommendation"],
    )


def _build_excipient(record: Dict) -> ExcipientMapping:
    _require(record, ("allergen", "drugs_containing", "message"), "Excipient mapping")
    return ExcipientMapping(
        allergen=record["allergen"],
        drugs_containing=tuple(record["drugs_containing"]),
        message=record["message"],
    )


@dataclass(frozen=True)
class AllergyKnowledgeBase:
    """Immutable rule set consumed by ``AllergyChecker``."""
    groups: Tuple[CrossReactivityGroup, ...]
    excipients: Tuple[ExcipientMapping, ...]

    @classmethod
    def from_records(
        cls,
        groups: Iterable[Dict],
        excipients: Iterable[Dict] = (),
    ) -> "AllergyKnowledgeBase":
        """
        Validate and freeze plain dict records.

        Raises:
            RuleTableError: a record is missing a field, has an unknown
                severity, or a group name is repeated.
        """
        built_groups = tuple(_build_group(g) for g in groups)
        built_excipients = tuple(_build_excipient(e) for e in excipients)

        names = [g.group_name for g in built_groups]
        duplicates = sorted(set(n for n in names if names.count(n) > 1))
        if duplicates:
            raise RuleTableError(f"Duplicate cross-reactivity groups: {', '.join(duplicates)}")

        logger.debug(
            f"Loaded allergy knowledge base: {len(built_groups)} groups, "
            f"{len(built_excipients)} excipients"
        )
        return cls(groups=built_groups, excipients=built_excipients)


@lru_cache()
def default_knowledge_base() -> AllergyKnowledgeBase:
    """Reference knowledge base, built once per process."""
    return AllergyKnowledgeBase.from_records(CROSS_REACTIVITY_GROUPS, EXCIPIENT_MAPPINGS)
