"""
This module defines the ClaimMatrix class, which provides a tabular view of
a generation pass: which handler owns which property and which handler
synthesized members for it. It is the quickest way to answer "why does this
property behave the way it does" for an augmented type.

- **Rows**: every property that was claimed, received convention support or
  had members synthesized for it.
- **Columns**: the handlers, in the order they ran.
- **Cells**: "claimed", "synthesized", "claimed / synthesized", "fallback"
  (the property reads through the convention mapping) or "".

It is the underlying component of `ClaimGraph.build_matrix()`.
"""

import pandas as pd

from typeweave._errors import InvalidGenerationReportError, _validate_report_type


class ClaimMatrix:
    """Matrix view of a generation report.

    This class builds a table (pd.DataFrame) where:
    - Rows = property names
    - Columns = handler names
    - Cell values per handler/property:
        * "claimed / synthesized" if the handler owns the property and
          synthesized members for it
        * "claimed" if the handler owns the property only
        * "fallback" if the handler installed convention accessors for it
        * "synthesized" if the handler synthesized members without owning it
        * "" otherwise

    The matrix accepts a `GenerationReport` or any object carrying one in a
    `report` attribute (e.g. an `AugmentedType`).
    """

    def __init__(self, report: object):
        report = getattr(report, "report", report)
        if report is None:
            raise InvalidGenerationReportError("report must not be None")
        self._report = _validate_report_type(report)

    def build(self) -> pd.DataFrame:
        """Construct and return the claim matrix as a pandas DataFrame."""
        claims = self._report._claims
        fallback = set(self._report._fallback_properties)
        synthesized: set[tuple[str, str]] = set()
        wired: set[tuple[str, str]] = set()
        for handler, prop, _, kind in self._report._members:
            if not prop:
                continue
            synthesized.add((handler, prop))
            if prop in fallback and kind.startswith("convention"):
                wired.add((handler, prop))

        row_names = set(claims) | fallback | {prop for _, prop in synthesized}
        rows = sorted(row_names)
        cols = list(self._report._handlers)

        if not rows and not cols:
            return pd.DataFrame()

        data: dict[str, list[str]] = {}
        for handler in cols:
            col_values: list[str] = []
            for prop in rows:
                is_claimed = claims.get(prop) == handler
                is_synthesized = (handler, prop) in synthesized
                is_fallback = (handler, prop) in wired

                if is_claimed and is_synthesized:
                    col_values.append("claimed / synthesized")
                elif is_claimed:
                    col_values.append("claimed")
                elif is_fallback:
                    col_values.append("fallback")
                elif is_synthesized:
                    col_values.append("synthesized")
                else:
                    col_values.append("")
            data[handler] = col_values

        return pd.DataFrame(data, index=rows, columns=cols)
