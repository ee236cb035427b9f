"""
Pydantic schemas for the engine's input boundary.

The engine itself does not validate; callers parse raw payloads here first
and hand the resulting immutable records to the engine.
"""
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing import Any, Dict, List, Optional, Type, TypeVar

from clinical_safety.allergy.models import Allergy
from clinical_safety.constants import Ascites, Encephalopathy, Sex
from clinical_safety.dosing.models import ChildPughInput, PatientParameters
from clinical_safety.exceptions import InputValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class PatientParametersSchema(BaseModel):
    """Patient parameters for renal and weight-based calculations."""
    model_config = ConfigDict(allow_inf_nan=False)

    age: float = Field(..., ge=0, le=150, description="Age in years")
    weight: float = Field(..., gt=0, description="Weight in kg")
    height: float = Field(..., gt=0, description="Height in cm")
    sex: Sex
    serum_creatinine: Optional[float] = Field(
        None, gt=0, description="Serum creatinine mg/dL (defaults to 1.0)"
    )

    def to_parameters(self) -> PatientParameters:
        return PatientParameters(
            age=self.age,
            weight=self.weight,
            height=self.height,
            sex=self.sex,
            serum_creatinine=self.serum_creatinine,
        )


class ChildPughSchema(BaseModel):
    """Child-Pugh components."""
    model_config = ConfigDict(allow_inf_nan=False)

    bilirubin: float = Field(..., ge=0, description="Total bilirubin mg/dL")
    albumin: float = Field(..., gt=0, description="Serum albumin g/dL")
    inr: float = Field(..., gt=0)
    ascites: Ascites = Ascites.NONE
    encephalopathy: Encephalopathy = Encephalopathy.NONE

    def to_input(self) -> ChildPughInput:
        return ChildPughInput(
            bilirubin=self.bilirubin,
            albumin=self.albumin,
            inr=self.inr,
            ascites=self.ascites,
            encephalopathy=self.encephalopathy,
        )


class AllergySchema(BaseModel):
    allergen: str = Field(..., min_length=1)
    reaction: Optional[str] = None

    def to_allergy(self) -> Allergy:
        return Allergy(allergen=self.allergen, reaction=self.reaction)


# Request Schemas
class DosingReportRequest(BaseModel):
    """Dosing report for a patient and proposed medications."""
    patient: PatientParametersSchema
    medications: List[str] = Field(default_factory=list)
    on_dialysis: bool = False
    hepatic: Optional[ChildPughSchema] = None


class AllergyCheckRequest(BaseModel):
    """Allergy check for proposed medications."""
    allergies: List[AllergySchema] = Field(default_factory=list)
    drugs: List[str] = Field(default_factory=list)

    def to_allergies(self) -> List[Allergy]:
        return [a.to_allergy() for a in self.allergies]


class TreatmentSafetyRequest(BaseModel):
    """Combined dosing and allergy check."""
    patient: PatientParametersSchema
    medications: List[str] = Field(default_factory=list)
    allergies: List[AllergySchema] = Field(default_factory=list)
    on_dialysis: bool = False
    hepatic: Optional[ChildPughSchema] = None

    def to_allergies(self) -> List[Allergy]:
        return [a.to_allergy() for a in self.allergies]


def parse_request(schema: Type[SchemaT], payload: Dict[str, Any]) -> SchemaT:
    """
    Validate a raw payload against a request schema.

    Raises:
        InputValidationError: with pydantic's error list attached
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] or "<root>" for e in errors)
        raise InputValidationError(
            detail=f"Invalid {schema.__name__}: {fields}",
            errors=errors,
        ) from exc
