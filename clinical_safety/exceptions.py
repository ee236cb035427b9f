"""
Custom exception classes for the engine.

Expected outcomes (unknown drug, no matching cross-reactivity group) are
return values, not exceptions. These classes cover the validation boundary
and malformed rule tables only.
"""
from typing import Any, Dict, List, Optional

from clinical_safety.constants import ErrorCodes


class ClinicalSafetyError(Exception):
    """Base exception for the clinical safety engine."""

    def __init__(
        self,
        detail: str = "An error occurred",
        error_code: Optional[str] = ErrorCodes.INTERNAL_ERROR,
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code


class InputValidationError(ClinicalSafetyError):
    """Raised when a request payload fails boundary validation."""

    def __init__(self, detail: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(detail=detail, error_code=ErrorCodes.VALIDATION_ERROR)
        self.errors = errors or []


class RuleTableError(ClinicalSafetyError):
    """Raised when a rule table is built from malformed records."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code=ErrorCodes.RULE_TABLE_ERROR)
