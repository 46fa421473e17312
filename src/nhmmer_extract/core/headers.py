"""FASTA header rewriting with hit provenance."""

from __future__ import annotations

import math
from decimal import Decimal

from ..models import ExtractedSequence, HitRecord, OutputRecord


def format_e_value(e_value: float) -> str:
    """Format an E-value in compact exponential notation.

    Uses the shortest digits that round-trip, with no exponent padding and no
    ``+`` sign: ``1e-5``, ``1.5e-7``, ``3e2``, ``0e0``.
    """
    if math.isnan(e_value):
        return "NaN"
    if math.isinf(e_value):
        return "-inf" if e_value < 0 else "inf"

    sign, digits, exponent = Decimal(repr(float(e_value))).as_tuple()
    exponent = exponent + len(digits) - 1

    mantissa = "".join(str(d) for d in digits).rstrip("0") or "0"
    if mantissa == "0":
        exponent = 0
    if len(mantissa) > 1:
        mantissa = f"{mantissa[0]}.{mantissa[1:]}"

    return f"{'-' if sign else ''}{mantissa}e{exponent}"


def rewrite_name(species_id: str, e_value: float, original_name: str) -> str:
    """Build the provenance identifier for an extracted sequence.

    ``{species_id}:E{e_value}:{original_name}``, or
    ``{original_name}:E{e_value}`` when no species tag is set.
    """
    e_token = f"E{format_e_value(e_value)}"
    if not species_id:
        return f"{original_name}:{e_token}"
    return f"{species_id}:{e_token}:{original_name}"


class HeaderRewriter:
    """Renames extracted records for one run's species tag."""

    def __init__(self, species_id: str = ""):
        self._species_id = species_id or ""

    @property
    def species_id(self) -> str:
        return self._species_id

    def rewrite(self, hit: HitRecord, extracted: ExtractedSequence) -> OutputRecord:
        """Rename ``extracted``, keeping its description and sequence."""
        return OutputRecord(
            name=rewrite_name(self._species_id, hit.e_value, extracted.name),
            description=extracted.description,
            sequence=extracted.sequence,
        )
