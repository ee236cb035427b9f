import pytest

from clinical_safety.allergy.engine import get_default_checker
from clinical_safety.config import get_settings
from clinical_safety.constants import Sex
from clinical_safety.dosing.models import PatientParameters, RenalFunctionAssessment
from clinical_safety.dosing.renal import get_ckd_stage


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings and the default checker are cached per process; reset around each test."""
    get_settings.cache_clear()
    get_default_checker.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_checker.cache_clear()


@pytest.fixture
def standard_male():
    return PatientParameters(age=50, weight=80, height=175, sex=Sex.MALE, serum_creatinine=1.0)


@pytest.fixture
def standard_female():
    return PatientParameters(age=45, weight=65, height=162, sex=Sex.FEMALE, serum_creatinine=0.9)


@pytest.fixture
def geriatric_patient():
    return PatientParameters(age=78, weight=60, height=165, sex=Sex.MALE, serum_creatinine=1.6)


@pytest.fixture
def young_patient():
    return PatientParameters(age=25, weight=70, height=178, sex=Sex.MALE, serum_creatinine=0.8)


@pytest.fixture
def severe_renal_patient():
    return PatientParameters(age=68, weight=72, height=170, sex=Sex.MALE, serum_creatinine=4.5)


@pytest.fixture
def obese_patient():
    return PatientParameters(age=40, weight=130, height=170, sex=Sex.MALE, serum_creatinine=1.0)


def make_renal(crcl: float, egfr: float = None) -> RenalFunctionAssessment:
    """Assessment with a chosen CrCl, for dose-table lookups."""
    egfr = crcl if egfr is None else egfr
    stage = get_ckd_stage(egfr)
    return RenalFunctionAssessment(
        creatinine_clearance=crcl,
        egfr=egfr,
        ckd_stage=stage.stage,
        ckd_description=stage.description,
        renal_adjustment_required=crcl < 50 or egfr < 60,
    )


@pytest.fixture
def renal_at():
    return make_renal
