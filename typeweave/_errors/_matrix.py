"""
This module defines custom exceptions related to the `ClaimMatrix` class,
which is used for creating a tabular representation of a generation pass.

`InvalidGenerationReportError`:
This `ValueError` is raised when the `ClaimMatrix` is initialized with
something other than a generation report (or an augmented type carrying
one). The matrix builder requires string property names, string handler names
and member records of the form `(handler, property, attribute, kind)`.
"""


class InvalidGenerationReportError(ValueError):
    """Raised when ClaimMatrix receives an invalid or malformed report."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid generation report for ClaimMatrix: {detail}")


def _validate_report_type(report: object) -> object:
    """Validate the structure of a generation report.

    Args:
        report (object): The report to validate.

    Returns:
        object: The validated report.

    Raises:
        InvalidGenerationReportError: If a section is missing or malformed.
    """
    for section in ("_claims", "_fallback_properties", "_members", "_handlers"):
        if not hasattr(report, section):
            raise InvalidGenerationReportError(f"Missing section '{section}'")

    claims = report._claims
    if not isinstance(claims, dict):
        raise InvalidGenerationReportError("Claims must be a dictionary")
    for prop, handler in claims.items():
        if not isinstance(prop, str) or not isinstance(handler, str):
            raise InvalidGenerationReportError("Claims must map strings to strings")

    if not all(isinstance(p, str) for p in report._fallback_properties):
        raise InvalidGenerationReportError("Fallback properties must be strings")

    if not all(isinstance(h, str) for h in report._handlers):
        raise InvalidGenerationReportError("Handler names must be strings")

    for member in report._members:
        if not (isinstance(member, tuple) and len(member) == 4):
            raise InvalidGenerationReportError(
                "Members must be (handler, property, attribute, kind) tuples"
            )

    return report
