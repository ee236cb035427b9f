"""
Tests for the input validation boundary.
"""
import pytest

from clinical_safety.constants import Ascites, ErrorCodes, Sex
from clinical_safety.dosing.models import PatientParameters
from clinical_safety.exceptions import InputValidationError
from clinical_safety.schemas import (
    AllergyCheckRequest,
    DosingReportRequest,
    TreatmentSafetyRequest,
    parse_request,
)

PATIENT = {"age": 50, "weight": 80, "height": 175, "sex": "male", "serum_creatinine": 1.0}


class TestPatientValidation:
    def test_valid_patient_converts(self):
        request = parse_request(DosingReportRequest, {"patient": PATIENT, "medications": ["metformin"]})
        params = request.patient.to_parameters()
        assert params == PatientParameters(age=50, weight=80, height=175, sex=Sex.MALE, serum_creatinine=1.0)
        assert request.on_dialysis is False
        assert request.hepatic is None

    def test_serum_creatinine_optional(self):
        patient = {k: v for k, v in PATIENT.items() if k != "serum_creatinine"}
        request = parse_request(DosingReportRequest, {"patient": patient})
        assert request.patient.to_parameters().effective_serum_creatinine == 1.0

    @pytest.mark.parametrize("field,value", [
        ("weight", 0),
        ("weight", -5),
        ("height", 0),
        ("serum_creatinine", 0),
        ("age", -1),
        ("age", 151),
        ("sex", "unknown"),
    ])
    def test_rejects_bad_values(self, field, value):
        payload = {"patient": {**PATIENT, field: value}}
        with pytest.raises(InputValidationError) as exc:
            parse_request(DosingReportRequest, payload)
        assert exc.value.error_code == ErrorCodes.VALIDATION_ERROR
        assert exc.value.errors[0]["field"] == f"patient.{field}"

    @pytest.mark.parametrize("field", ["age", "weight", "height", "serum_creatinine"])
    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_rejects_non_finite_values(self, field, value):
        payload = {"patient": {**PATIENT, field: value}}
        with pytest.raises(InputValidationError) as exc:
            parse_request(DosingReportRequest, payload)
        assert exc.value.errors[0]["field"] == f"patient.{field}"

    def test_missing_patient(self):
        with pytest.raises(InputValidationError) as exc:
            parse_request(DosingReportRequest, {"medications": []})
        assert "patient" in exc.value.detail


class TestChildPughValidation:
    def test_hepatic_converts(self):
        payload = {
            "patient": PATIENT,
            "hepatic": {"bilirubin": 2.5, "albumin": 3.0, "inr": 1.5, "ascites": "mild"},
        }
        hepatic = parse_request(DosingReportRequest, payload).hepatic.to_input()
        assert hepatic.ascites == Ascites.MILD
        assert hepatic.encephalopathy == "none"

    def test_rejects_unknown_encephalopathy(self):
        payload = {
            "patient": PATIENT,
            "hepatic": {"bilirubin": 1, "albumin": 4, "inr": 1, "encephalopathy": "grade5"},
        }
        with pytest.raises(InputValidationError):
            parse_request(DosingReportRequest, payload)

    @pytest.mark.parametrize("field", ["bilirubin", "albumin", "inr"])
    def test_rejects_infinite_components(self, field):
        hepatic = {"bilirubin": 1, "albumin": 4, "inr": 1, field: float("inf")}
        with pytest.raises(InputValidationError) as exc:
            parse_request(DosingReportRequest, {"patient": PATIENT, "hepatic": hepatic})
        assert exc.value.errors[0]["field"] == f"hepatic.{field}"


class TestAllergyValidation:
    def test_allergies_convert(self):
        request = parse_request(AllergyCheckRequest, {
            "allergies": [{"allergen": "penicillin", "reaction": "hives"}],
            "drugs": ["cephalexin"],
        })
        allergies = request.to_allergies()
        assert allergies[0].allergen == "penicillin"
        assert allergies[0].reaction == "hives"

    def test_rejects_empty_allergen(self):
        with pytest.raises(InputValidationError):
            parse_request(AllergyCheckRequest, {"allergies": [{"allergen": ""}], "drugs": []})

    def test_treatment_request_defaults(self):
        request = parse_request(TreatmentSafetyRequest, {"patient": PATIENT})
        assert request.medications == []
        assert request.to_allergies() == []
