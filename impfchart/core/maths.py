"""
Numeric reductions used by the statistics engine.
"""

from collections.abc import Sequence

Number = int | float


def total(values: Sequence[Number]) -> Number:
    return sum(values)


def mean(values: Sequence[Number]) -> float:
    """
    Arithmetic mean.

    Raises:
        ValueError: If values is empty
    """
    if not values:
        raise ValueError("mean of empty sequence")
    return total(values) / len(values)


def median(values: Sequence[Number]) -> Number:
    """
    Median of a non-empty sequence.

    Odd counts return the central value; even counts return the mean of
    the two central values.

    Raises:
        ValueError: If values is empty (callers check for presence first)
    """
    if not values:
        raise ValueError("median of empty sequence")

    ordered = sorted(values)
    middle = len(ordered) // 2

    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


REDUCERS = {
    "median": median,
    "mean": mean,
}
