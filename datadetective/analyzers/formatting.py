from typing import List, Sequence
import math


def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def currency_fmt(v, symbol='$', decimals=0):
    if v is None:
        return 'N/A'
    return f"{symbol}{v:,.{decimals}f}"


def pct(part: float, total: float) -> float:
    if not total:
        return 0.0
    return round(part / total * 100, 1)


def distribute_percentages(counts: Sequence[int]) -> List[float]:
    """Percentages at 0.1 resolution that add up to exactly 100.

    Largest-remainder rounding; remainder ties go to the earlier bucket.
    """
    total = sum(counts)
    if total <= 0:
        return [0.0 for _ in counts]
    raw = [c * 1000 / total for c in counts]
    units = [int(math.floor(r)) for r in raw]
    short = 1000 - sum(units)
    order = sorted(range(len(raw)), key=lambda i: -(raw[i] - units[i]))
    for i in order[:short]:
        units[i] += 1
    return [u / 10 for u in units]
