# -*- coding: utf-8 -*-
"""
Skin Market Suite | Grouper

Buckets parsed Records into Region -> Segment Type -> Segment Name ->
TimeSeries. Duplicate (region, segment type, segment name, year) rows
follow a last-wins policy: the later row replaces the earlier value.
"""

from __future__ import annotations
from collections import Counter
from typing import Dict, Iterable, List, Tuple

from skin_market.models import GroupedData, Record, TimePoint

Quadruple = Tuple[str, str, str, int]


def group_records(records: Iterable[Record]) -> GroupedData:
    """
    Group records into sorted time series.

    Args:
        records: Parsed records in input order

    Returns:
        Nested mapping; every series ascending by year with one point per year
    """
    buckets: Dict[str, Dict[str, Dict[str, Dict[int, float]]]] = {}

    for r in records:
        series = (
            buckets.setdefault(r.region, {})
            .setdefault(r.segment_type, {})
            .setdefault(r.segment_name, {})
        )
        series[r.year] = r.value

    return {
        region: {
            segment_type: {
                segment_name: [TimePoint(year, by_year[year]) for year in sorted(by_year)]
                for segment_name, by_year in segments.items()
            }
            for segment_type, segments in types.items()
        }
        for region, types in buckets.items()
    }


def find_duplicates(records: Iterable[Record]) -> List[Quadruple]:
    """Quadruples that appear more than once, in first-seen order."""
    counts = Counter((r.region, r.segment_type, r.segment_name, r.year) for r in records)
    return [key for key, n in counts.items() if n > 1]


def count_points(grouped: GroupedData) -> int:
    return sum(
        len(points)
        for types in grouped.values()
        for segments in types.values()
        for points in segments.values()
    )
