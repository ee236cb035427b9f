"""
Command-line entry point.

Reads a JSON request from a file (or stdin with ``-``), runs one engine
operation and writes the JSON result to stdout.

    clinical-safety dosing patient.json
    echo '{"allergies": [{"allergen": "penicillin"}], "drugs": ["cephalexin"]}' | clinical-safety allergy -
    clinical-safety validate
"""
import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from clinical_safety.allergy.engine import get_default_checker
from clinical_safety.config import get_settings
from clinical_safety.dosing.report import generate_dosing_report
from clinical_safety.exceptions import InputValidationError
from clinical_safety.safety_report import generate_treatment_safety_report
from clinical_safety.schemas import (
    AllergyCheckRequest,
    DosingReportRequest,
    TreatmentSafetyRequest,
    parse_request,
)
from clinical_safety.validation import run_validation

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_INVALID_INPUT = 2


def _read_payload(source: str) -> Dict[str, Any]:
    try:
        if source == "-":
            return json.load(sys.stdin)
        with open(source, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise InputValidationError(
            detail=f"Request is not valid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        ) from exc
    except UnicodeDecodeError as exc:
        raise InputValidationError(detail=f"Request is not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise InputValidationError(detail=f"Cannot read request '{source}': {exc.strerror or exc}") from exc


def _run_dosing(payload: Dict[str, Any]) -> Dict[str, Any]:
    request = parse_request(DosingReportRequest, payload)
    report = generate_dosing_report(
        request.patient.to_parameters(),
        request.medications,
        on_dialysis=request.on_dialysis,
        hepatic=request.hepatic.to_input() if request.hepatic else None,
    )
    return report.to_dict()


def _run_allergy(payload: Dict[str, Any]) -> Dict[str, Any]:
    request = parse_request(AllergyCheckRequest, payload)
    result = get_default_checker().check_allergies(request.to_allergies(), request.drugs)
    return result.to_dict()


def _run_report(payload: Dict[str, Any]) -> Dict[str, Any]:
    request = parse_request(TreatmentSafetyRequest, payload)
    report = generate_treatment_safety_report(
        request.patient.to_parameters(),
        request.medications,
        allergies=request.to_allergies(),
        on_dialysis=request.on_dialysis,
        hepatic=request.hepatic.to_input() if request.hepatic else None,
        checker=get_default_checker(),
    )
    return report.to_dict()


COMMANDS = {
    "dosing": _run_dosing,
    "allergy": _run_allergy,
    "report": _run_report,
}


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="clinical-safety",
        description=f"{settings.APP_NAME} {settings.APP_VERSION}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("dosing", "Renal/hepatic dosing report for a medication list"),
        ("allergy", "Allergy cross-reactivity check"),
        ("report", "Combined treatment safety report"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", nargs="?", default="-",
                         help="JSON request file, or '-' for stdin (default)")

    subparsers.add_parser("validate", help="Run curated clinical validation cases")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
        format=settings.LOG_FORMAT,
    )

    args = build_parser().parse_args(argv)

    if args.command == "validate":
        results = run_validation(checker=get_default_checker())
        failed = [r for r in results if not r["pass"]]
        for r in results:
            status = "PASS" if r["pass"] else "FAIL"
            print(f"[{status}] {r['case']} -> expected {r['expected']} got {r['got']}")
        logger.info(f"Validation: {len(results) - len(failed)}/{len(results)} cases passed")
        return EXIT_VALIDATION_FAILED if failed else EXIT_OK

    try:
        result = COMMANDS[args.command](_read_payload(args.input))
    except InputValidationError as e:
        logger.warning(f"Invalid {args.command} request: {e.detail}")
        error = {"error_code": e.error_code, "detail": e.detail, "errors": e.errors}
        print(json.dumps(error, indent=settings.JSON_INDENT), file=sys.stderr)
        return EXIT_INVALID_INPUT

    print(json.dumps(result, indent=settings.JSON_INDENT, allow_nan=True))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
