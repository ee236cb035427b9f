"""
Tests for the allergy cross-reactivity engine.
"""
import pytest

from clinical_safety.allergy.engine import (
    AllergyChecker,
    check_allergies,
    deduplicate_alerts,
    get_cross_reactivity_info,
    get_default_checker,
    is_drug_safe_for_patient,
)
from clinical_safety.allergy.knowledge_base import AllergyKnowledgeBase
from clinical_safety.allergy.matching import TokenMatcher
from clinical_safety.allergy.models import Allergy
from clinical_safety.constants import AlertSeverity, AlertType


def alert_types(result):
    return [a.alert_type for a in result.alerts]


class TestCrossReactivity:
    def test_penicillin_cephalexin(self):
        result = check_allergies(["penicillin"], ["cephalexin"])
        assert len(result.alerts) == 1
        alert = result.alerts[0]
        assert alert.alert_type == AlertType.CROSS_REACTIVE
        assert alert.severity == AlertSeverity.HIGH
        assert alert.cross_reactivity_rate == "1-10%"
        assert alert.message == (
            "CROSS-REACTIVITY (Penicillin / Beta-Lactam): Patient allergic to penicillin. "
            "cephalexin has 1-10% cross-reactivity risk."
        )
        assert result.safe is False

    def test_sulfa_furosemide_low_severity_is_safe(self):
        result = check_allergies(["sulfa"], ["furosemide"])
        assert len(result.alerts) == 1
        alert = result.alerts[0]
        assert alert.alert_type == AlertType.CROSS_REACTIVE
        assert alert.severity == AlertSeverity.LOW
        assert alert.cross_reactivity_rate == "<2%"
        assert result.safe is True

    def test_sulfa_celecoxib_low_risk(self):
        result = check_allergies(["sulfa"], ["celecoxib"])
        assert [a.severity for a in result.alerts] == [AlertSeverity.LOW]
        assert result.safe is True

    def test_group_with_no_matching_drug(self):
        result = check_allergies(["penicillin"], ["azithromycin"])
        assert result.alerts == ()
        assert result.safe is True


class TestDirectAndClassAlerts:
    def test_direct_match(self):
        result = check_allergies(["Ibuprofen"], ["ibuprofen"])
        assert alert_types(result) == [AlertType.DIRECT]
        alert = result.alerts[0]
        assert alert.cross_reactivity_rate == "100%"
        assert alert.message == "DIRECT ALLERGY: Patient is allergic to ibuprofen; ibuprofen is the same or closely related."
        assert result.safe is False

    def test_class_based_penicillin_amoxicillin(self):
        result = check_allergies(["penicillin"], ["amoxicillin"])
        assert alert_types(result) == [AlertType.CLASS_BASED]
        alert = result.alerts[0]
        assert alert.severity == AlertSeverity.HIGH
        assert alert.cross_reactivity_rate == "Same class"
        assert alert.recommendation.startswith("Avoid all drugs in the Penicillin / Beta-Lactam class.")

    def test_class_based_nsaid(self):
        result = check_allergies(["aspirin"], ["ibuprofen"])
        assert alert_types(result) == [AlertType.CLASS_BASED]
        assert "NSAID" in result.alerts[0].message

    def test_direct_and_cross_reactive_for_same_pair(self):
        result = check_allergies(["sulfa"], ["sulfadiazine"])
        assert alert_types(result) == [AlertType.DIRECT, AlertType.CROSS_REACTIVE]

    def test_cross_reactive_and_class_based_for_same_pair(self):
        # Drug is both another primary allergen and on the cross-reactive list
        kb = AllergyKnowledgeBase.from_records([{
            "group_name": "Test Mab",
            "primary_allergens": ["alphamab", "betamab"],
            "cross_reactive_drugs": ["betamab"],
            "cross_reactivity_rate": "5%",
            "severity": "low",
            "recommendation": "Review.",
        }])
        result = AllergyChecker(knowledge_base=kb).check_allergies(["alphamab"], ["betamab"])
        assert alert_types(result) == [AlertType.CROSS_REACTIVE, AlertType.CLASS_BASED]
        assert [a.severity for a in result.alerts] == [AlertSeverity.LOW, AlertSeverity.HIGH]
        assert result.safe is False


class TestExcipientAlerts:
    def test_egg_excipient(self):
        result = check_allergies(["egg"], ["propofol"])
        assert alert_types(result) == [AlertType.EXCIPIENT]
        alert = result.alerts[0]
        assert alert.drug == "propofol, influenza vaccine (some), yellow fever vaccine"
        assert alert.severity == AlertSeverity.MODERATE
        assert alert.cross_reactivity_rate == "Varies"
        assert result.safe is True

    def test_excipient_reported_even_without_drugs(self):
        result = check_allergies(["lactose"], [])
        assert alert_types(result) == [AlertType.EXCIPIENT]


class TestInputsAndResultShape:
    def test_no_allergies(self):
        result = check_allergies([], ["metformin"])
        assert result.safe is True
        assert result.alerts == ()

    def test_allergy_records_accepted(self):
        result = check_allergies([Allergy("Penicillin", reaction="rash")], ["cephalexin"])
        assert result.alerts[0].allergen == "penicillin"
        assert result.checked_allergens == ("Penicillin",)

    def test_drug_names_normalized_in_alerts_but_echoed_in_result(self):
        result = check_allergies(["penicillin"], [" Cephalexin "])
        assert result.alerts[0].drug == "cephalexin"
        assert result.checked_drugs == (" Cephalexin ",)

    def test_empty_allergen_matches_everything(self):
        result = check_allergies([""], ["lisinopril"])
        assert AlertType.DIRECT in alert_types(result)
        assert result.safe is False

    def test_to_dict(self):
        d = check_allergies(["penicillin"], ["cephalexin"]).to_dict()
        assert d["safe"] is False
        assert d["alerts"][0]["alert_type"] == "cross-reactive"
        assert d["alerts"][0]["severity"] == "high"
        assert d["checked_drugs"] == ["cephalexin"]


class TestDeduplication:
    def test_repeated_allergen_deduplicated(self):
        result = check_allergies(["penicillin", "Penicillin"], ["cephalexin", "cephalexin"])
        assert len(result.alerts) == 1

    def test_idempotent_and_order_stable(self):
        allergies = ["penicillin", "sulfa", "egg", "aspirin"]
        drugs = ["cephalexin", "furosemide", "ibuprofen", "meropenem"]
        first = check_allergies(allergies, drugs)
        second = check_allergies(allergies, drugs)
        assert first == second
        assert [a.dedup_key for a in first.alerts] == [a.dedup_key for a in second.alerts]

    def test_deduplicate_keeps_first(self):
        alerts = list(check_allergies(["penicillin"], ["cephalexin"]).alerts)
        assert deduplicate_alerts(alerts + alerts) == alerts


class TestSupportingQueries:
    def test_is_drug_safe_for_patient(self):
        assert is_drug_safe_for_patient("cephalexin", ["penicillin"]).safe is False
        assert is_drug_safe_for_patient("furosemide", ["sulfa"]).safe is True

    def test_cross_reactivity_info(self):
        groups = get_cross_reactivity_info("Penicillin")
        assert [g.group_name for g in groups] == ["Penicillin / Beta-Lactam"]

    def test_cross_reactivity_info_sulfa_two_groups(self):
        names = [g.group_name for g in get_cross_reactivity_info("sulfa")]
        assert names == ["Sulfonamide Antibiotics", "Sulfonamide → Non-Antibiotic Sulfonamides"]

    def test_cross_reactivity_info_unknown(self):
        assert get_cross_reactivity_info("water") == []


class TestMatcherSubstitution:
    def test_token_matcher_drops_substring_direct_hit(self):
        substring = AllergyChecker().check_allergies(["sulfa"], ["sulfadiazine"])
        token = AllergyChecker(matcher=TokenMatcher()).check_allergies(["sulfa"], ["sulfadiazine"])
        assert alert_types(substring) == [AlertType.DIRECT, AlertType.CROSS_REACTIVE]
        assert alert_types(token) == [AlertType.CROSS_REACTIVE]

    @pytest.mark.parametrize("allergen,drug", [
        ("penicillin", "cephalexin"),
        ("sulfa", "furosemide"),
    ])
    def test_token_matcher_keeps_exact_name_rules(self, allergen, drug):
        default = AllergyChecker().check_allergies([allergen], [drug])
        token = AllergyChecker(matcher=TokenMatcher()).check_allergies([allergen], [drug])
        assert token == default

    def test_default_checker_follows_matcher_setting(self, monkeypatch):
        monkeypatch.setenv("CLINICAL_SAFETY_ALLERGY_MATCHER", "token")
        assert get_default_checker().matcher.name == "token"
        assert alert_types(check_allergies(["sulfa"], ["sulfadiazine"])) == [AlertType.CROSS_REACTIVE]

    def test_default_checker_uses_substring_matcher(self):
        assert get_default_checker().matcher.name == "substring"
        assert get_default_checker() is get_default_checker()
