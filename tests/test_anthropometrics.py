"""
Tests for BSA, IBW and ABW.
"""
import pytest

from clinical_safety.constants import Sex
from clinical_safety.dosing.anthropometrics import (
    calculate_abw,
    calculate_anthropometrics,
    calculate_bsa,
    calculate_ibw,
)
from clinical_safety.dosing.models import PatientParameters


class TestBSA:
    def test_standard_male(self, standard_male):
        assert calculate_bsa(standard_male) == 1.97

    def test_standard_female(self, standard_female):
        assert calculate_bsa(standard_female) == 1.71

    def test_obese(self, obese_patient):
        assert calculate_bsa(obese_patient) == 2.48


class TestIBW:
    def test_male_devine(self, standard_male):
        assert calculate_ibw(standard_male) == 70.5

    def test_female_devine(self, standard_female):
        assert calculate_ibw(standard_female) == 54.2

    def test_other_sex_uses_male_base(self):
        male = PatientParameters(age=40, weight=70, height=175, sex=Sex.MALE)
        other = PatientParameters(age=40, weight=70, height=175, sex=Sex.OTHER)
        assert calculate_ibw(other) == calculate_ibw(male)

    def test_sex_accepts_plain_string(self):
        p = PatientParameters(age=45, weight=65, height=162, sex="female")
        assert calculate_ibw(p) == 54.2

    def test_never_negative_for_very_short_patient(self):
        p = PatientParameters(age=5, weight=10, height=50, sex=Sex.MALE)
        assert calculate_ibw(p) == 0


class TestABW:
    def test_non_obese_uses_actual_weight(self, standard_male):
        assert calculate_abw(standard_male) == standard_male.weight

    def test_obese_uses_correction(self, obese_patient):
        # IBW 65.9; 65.9 + 0.4 * (130 - 65.9) = 91.54
        assert calculate_abw(obese_patient) == 91.5

    def test_obese_between_ibw_and_actual(self, obese_patient):
        ibw = calculate_ibw(obese_patient)
        abw = calculate_abw(obese_patient)
        assert ibw <= abw <= obese_patient.weight

    @pytest.mark.parametrize("weight", [60, 70, 79, 80, 90, 110, 150])
    def test_abw_rule(self, weight):
        p = PatientParameters(age=40, weight=weight, height=170, sex=Sex.MALE)
        ibw = calculate_ibw(p)
        abw = calculate_abw(p)
        if weight <= ibw * 1.2:
            assert abw == weight
        else:
            assert abw == pytest.approx(ibw + 0.4 * (weight - ibw), abs=0.05)
            assert ibw <= abw <= weight


def test_calculate_anthropometrics_bundle(obese_patient):
    result = calculate_anthropometrics(obese_patient)
    assert result.to_dict() == {"bsa": 2.48, "ibw": 65.9, "abw": 91.5}
