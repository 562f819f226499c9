"""Turn template range text into specific prescriptions.

"4-6 x 3-8 min" becomes "5 x 4 min". With a week position the value moves
from the low end of the range toward the high end, reaching it three
quarters of the way through the plan. Without one the midpoint is used.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Optional


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progression_value(low: float, high: float, week_number: Optional[int] = None, total_weeks: Optional[int] = None) -> int:
    if week_number and total_weeks:
        progress = min(1.0, week_number / (total_weeks * 0.75))
        return _round_half_up(low + progress * (high - low))
    return _round_half_up((low + high) / 2)


def _recovery(match: re.Match, week: Optional[int], total: Optional[int]) -> str:
    minutes = (int(match.group(1)) + int(match.group(2))) / 2
    if minutes <= 2:
        return f"{int(minutes * 60)} sec recovery"
    return f"{_round_half_up(minutes)} min recovery"


# (pattern, replacement builder) applied in order; later rules only see what earlier rules left.
_Rule = tuple[re.Pattern, Callable[[re.Match, Optional[int], Optional[int]], str]]

_RULES: tuple[_Rule, ...] = (
    # "4-6 x 3-8 min"
    (re.compile(r"(\d+)-(\d+)\s*x\s*(\d+)-(\d+)\s*min"),
     lambda m, w, t: f"{progression_value(int(m.group(1)), int(m.group(2)), w, t)} x "
                     f"{progression_value(int(m.group(3)), int(m.group(4)), w, t)} min"),
    # "2 x 10-15 min"
    (re.compile(r"(\d+)\s*x\s*(\d+)-(\d+)\s*min"),
     lambda m, w, t: f"{m.group(1)} x {progression_value(int(m.group(2)), int(m.group(3)), w, t)} min"),
    # "8-12 x (2 min tempo / 2 min easy)", "6-12 x 200m", "3-4 x 5 min"
    (re.compile(r"(\d+)-(\d+)(\s*x\s*)(?=[\d(])"),
     lambda m, w, t: f"{progression_value(int(m.group(1)), int(m.group(2)), w, t)}{m.group(3)}"),
    # "... x 10-30" at the end of an alternation
    (re.compile(r"\bx\s*(\d+)-(\d+)(?!\d)(?!\s*(?:min|sec|m\b|km|mi))"),
     lambda m, w, t: f"x {progression_value(int(m.group(1)), int(m.group(2)), w, t)}"),
    # "1-2 min recovery"
    (re.compile(r"(\d+)-(\d+)\s*min\s*recovery"), _recovery),
    # "15-20 min easy"
    (re.compile(r"(\d+)-(\d+)\s*min\s+(easy|warmup|cooldown|tempo|steady)"),
     lambda m, w, t: f"{progression_value(int(m.group(1)), int(m.group(2)), w, t)} min {m.group(3)}"),
    # "6-13 miles", "2-3 km"
    (re.compile(r"(\d+)-(\d+)\s*(miles?|km)\b"),
     lambda m, w, t: f"{progression_value(int(m.group(1)), int(m.group(2)), w, t)} {m.group(3)}"),
    # "20-30 min", "60-90sec"
    (re.compile(r"(\d+)-(\d+)\s*(minutes|min|seconds|sec)\b"),
     lambda m, w, t: f"{progression_value(int(m.group(1)), int(m.group(2)), w, t)} {m.group(3)}"),
)


def convert_ranges(text: Optional[str], week_number: Optional[int] = None, total_weeks: Optional[int] = None) -> Optional[str]:
    if not text:
        return text
    for pattern, build in _RULES:
        text = pattern.sub(lambda m: build(m, week_number, total_weeks), text)
    return text


def rep_range(text: Optional[str]) -> Optional[tuple[int, int]]:
    """(low, high) repetition bounds from text such as '4-8 x 800m' or '5 x 1 mile'."""
    if not text:
        return None
    match = re.search(r"(\d+)(?:-(\d+))?\s*x\s*", text)
    if not match:
        return None
    low = int(match.group(1))
    return low, int(match.group(2) or low)
