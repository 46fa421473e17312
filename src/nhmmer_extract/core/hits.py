"""Hit selection and range query construction."""

from __future__ import annotations

from typing import Iterable, Iterator

from loguru import logger

from ..models import HitRecord, RangeQuery


def keep_hit(hit: HitRecord, threshold: float) -> bool:
    """Whether a hit is significant enough to extract (inclusive of the threshold)."""
    return hit.e_value <= threshold


def filter_hits(hits: Iterable[HitRecord], threshold: float) -> Iterator[HitRecord]:
    """Lazily yield the hits that pass ``threshold``, preserving order."""
    for hit in hits:
        if keep_hit(hit, threshold):
            yield hit
        else:
            logger.debug(
                f"Skipping {hit.target_name} {hit.ali_from}..{hit.ali_to}: "
                f"E-value {hit.e_value} > {threshold}"
            )


def build_range_query(hit: HitRecord) -> RangeQuery:
    """Build the esl-sfetch style ``from..to`` query for a hit.

    Coordinates are passed through untouched, so minus strand hits keep
    ``ali_from > ali_to`` and come back reverse complemented.
    """
    return RangeQuery(
        target_name=hit.target_name,
        coordinates=f"{hit.ali_from}..{hit.ali_to}",
    )
