"""
Hepatic function scoring (Child-Pugh).

| Component       | 1 pt  | 2 pt     | 3 pt     |
|-----------------|-------|----------|----------|
| Bilirubin mg/dL | < 2   | 2 - 3    | > 3      |
| Albumin g/dL    | > 3.5 | 2.8 - 3.5| < 2.8    |
| INR             | < 1.7 | 1.7 - 2.3| > 2.3    |
| Ascites         | none  | mild     | moderate |
| Encephalopathy  | none  | grade1-2 | grade3-4 |

Score 5-6 -> A, 7-9 -> B, 10-15 -> C.
"""
from clinical_safety.constants import Ascites, ChildPughClass, Encephalopathy
from clinical_safety.dosing.models import ChildPughInput, ChildPughResult


def _score_bilirubin(bilirubin: float) -> int:
    if bilirubin < 2:
        return 1
    if bilirubin <= 3:
        return 2
    return 3


def _score_albumin(albumin: float) -> int:
    if albumin > 3.5:
        return 1
    if albumin >= 2.8:
        return 2
    return 3


def _score_inr(inr: float) -> int:
    if inr < 1.7:
        return 1
    if inr <= 2.3:
        return 2
    return 3


def _score_ascites(ascites) -> int:
    if ascites == Ascites.NONE:
        return 1
    if ascites == Ascites.MILD:
        return 2
    return 3


def _score_encephalopathy(encephalopathy) -> int:
    if encephalopathy == Encephalopathy.NONE:
        return 1
    if encephalopathy == Encephalopathy.GRADE_1_2:
        return 2
    return 3


def classify_child_pugh(score: int) -> ChildPughClass:
    if score <= 6:
        return ChildPughClass.A
    if score <= 9:
        return ChildPughClass.B
    return ChildPughClass.C


def calculate_child_pugh(params: ChildPughInput) -> ChildPughResult:
    """Sum the five component scores and classify."""
    score = (
        _score_bilirubin(params.bilirubin)
        + _score_albumin(params.albumin)
        + _score_inr(params.inr)
        + _score_ascites(params.ascites)
        + _score_encephalopathy(params.encephalopathy)
    )
    child_pugh_class = classify_child_pugh(score)

    return ChildPughResult(
        child_pugh_score=score,
        child_pugh_class=child_pugh_class,
        hepatic_adjustment_required=child_pugh_class != ChildPughClass.A,
    )
