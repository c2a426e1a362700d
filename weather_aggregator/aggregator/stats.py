"""
Reducers used to combine readings from several providers.
"""

import statistics
from collections import Counter
from collections.abc import Sequence

from .types import AggregatedStat


def aggregate_numeric(values: Sequence[float]) -> AggregatedStat:
    """
    Compute the average, minimum and maximum of a series.

    An empty series gives an all-zero result rather than an error. The
    average is clamped to the series bounds, as float rounding can put the
    mean of a constant series just outside them.
    """
    if not values:
        return AggregatedStat()

    lo, hi = min(values), max(values)
    return AggregatedStat(
        average=min(max(statistics.fmean(values), lo), hi),
        min=lo,
        max=hi,
        values=tuple(values),
    )


def most_frequent(values: Sequence[str]) -> str:
    """
    Return the most common value, or an empty string for an empty series.

    When several values share the highest count the one returned is not
    specified, callers must not depend on which of them wins.
    """
    if not values:
        return ""

    value, _ = Counter(values).most_common(1)[0]
    return value
