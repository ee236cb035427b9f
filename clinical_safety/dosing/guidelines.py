"""
Renal dosing guidelines.

One row per drug, one column per renal tier. The table is built once at
import time, is read-only afterwards, and is injected into the calculator so
alternate tables can be substituted. Adding a drug means adding a row.
"""
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from clinical_safety.constants import RenalTier
from clinical_safety.exceptions import RuleTableError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_drug_key(drug_name: str) -> str:
    """Lower-case and drop all whitespace: 'Metformin ' -> 'metformin'."""
    return _WHITESPACE.sub("", drug_name.lower())


@dataclass(frozen=True)
class RenalDosingGuideline:
    """Dose strings for each renal tier."""
    normal: str
    mild: str  # CrCl 50-80
    moderate: str  # CrCl 30-50
    severe: str  # CrCl 15-30
    esrd: str  # CrCl < 15
    dialysis: str

    def dose_for(self, tier: RenalTier) -> str:
        return getattr(self, tier.value)


class RenalDosingTable:
    """Read-only, case-insensitive drug -> guideline lookup."""

    def __init__(self, guidelines: Mapping[str, RenalDosingGuideline]):
        self._guidelines = MappingProxyType(
            {normalize_drug_key(name): row for name, row in guidelines.items()}
        )

    @classmethod
    def from_dict(cls, records: Mapping[str, Mapping[str, str]]) -> "RenalDosingTable":
        """
        Build a table from plain dict rows.

        Raises:
            RuleTableError: a row is missing a tier, has an empty dose, or two
                drug names collapse to the same key.
        """
        tiers = [tier.value for tier in RenalTier]
        guidelines: Dict[str, RenalDosingGuideline] = {}

        for drug_name, row in records.items():
            key = normalize_drug_key(drug_name)
            if not key:
                raise RuleTableError("Renal dosing row with an empty drug name")
            if key in guidelines:
                raise RuleTableError(f"Duplicate renal dosing row for '{drug_name}'")

            missing = [tier for tier in tiers if not row.get(tier)]
            if missing:
                raise RuleTableError(
                    f"Renal dosing row '{drug_name}' is missing tiers: {', '.join(missing)}"
                )

            guidelines[key] = RenalDosingGuideline(**{tier: row[tier] for tier in tiers})

        logger.debug(f"Loaded renal dosing table with {len(guidelines)} drugs")
        return cls(guidelines)

    def get(self, drug_name: str) -> Optional[RenalDosingGuideline]:
        return self._guidelines.get(normalize_drug_key(drug_name))

    def __contains__(self, drug_name: object) -> bool:
        return isinstance(drug_name, str) and normalize_drug_key(drug_name) in self._guidelines

    def __len__(self) -> int:
        return len(self._guidelines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._guidelines)


# ==================== REFERENCE TABLE ====================

RENAL_DOSING_GUIDELINES = {
    "metformin": {
        "normal": "500-1000mg BID",
        "mild": "500-1000mg BID",
        "moderate": "500mg BID (max 1000mg/day)",
        "severe": "CONTRAINDICATED",
        "esrd": "CONTRAINDICATED",
        "dialysis": "CONTRAINDICATED",
    },
    "gabapentin": {
        "normal": "300-600mg TID",
        "mild": "200-400mg TID",
        "moderate": "200-300mg BID",
        "severe": "100-200mg daily",
        "esrd": "100-200mg every other day",
        "dialysis": "125-350mg post-dialysis",
    },
    "lisinopril": {
        "normal": "10-40mg daily",
        "mild": "10-40mg daily",
        "moderate": "5-20mg daily",
        "severe": "2.5-10mg daily",
        "esrd": "2.5-5mg daily",
        "dialysis": "2.5mg daily",
    },
    "ciprofloxacin": {
        "normal": "500-750mg BID",
        "mild": "250-500mg BID",
        "moderate": "250-500mg Q12-18h",
        "severe": "250-500mg Q24h",
        "esrd": "250-500mg Q24h",
        "dialysis": "250-500mg post-dialysis",
    },
    "enoxaparin": {
        "normal": "1mg/kg Q12h",
        "mild": "1mg/kg Q12h",
        "moderate": "1mg/kg Q12h (monitor anti-Xa)",
        "severe": "1mg/kg Q24h",
        "esrd": "USE UNFRACTIONATED HEPARIN",
        "dialysis": "USE UNFRACTIONATED HEPARIN",
    },
    "sildenafil": {
        "normal": "50mg PRN",
        "mild": "50mg PRN",
        "moderate": "25mg PRN",
        "severe": "25mg PRN",
        "esrd": "25mg PRN",
        "dialysis": "25mg PRN",
    },
    "amoxicillin": {
        "normal": "500mg TID",
        "mild": "500mg TID",
        "moderate": "500mg BID",
        "severe": "500mg daily",
        "esrd": "500mg daily",
        "dialysis": "500mg post-dialysis",
    },
    # Hepatic clearance: no renal adjustment at any tier
    "atorvastatin": {
        "normal": "10-80mg daily",
        "mild": "10-80mg daily",
        "moderate": "10-80mg daily",
        "severe": "10-80mg daily",
        "esrd": "10-80mg daily",
        "dialysis": "10-80mg daily",
    },
}

DEFAULT_RENAL_DOSING_TABLE = RenalDosingTable.from_dict(RENAL_DOSING_GUIDELINES)
