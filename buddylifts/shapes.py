"""
Shape recognizers for free-text exercise clauses.

Three grammars, each usable two ways:
- on an isolated clause (exercise-unit parsing), returning captured fields;
- as a prefix test anchored at position 0 of the remaining text, terminated by
  a comma or end of string (segmentation), returning the consumed span.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Optional

from .models import MAX_COUNT, ShapeMatch, ShapeName

_NAME = r"(?P<name>[a-zA-Z\s]+?)"
_WEIGHT = r"(?:\s+(?:at|with|@)\s+(?P<weight>\d+(?:\.\d+)?)\s*(?:lbs?|kgs?))?"
_REST = r"(?:\s*,\s*(?P<rest>\d+)s?\s*rest)?"
_CLAUSE_END = r"(?:\s*,\s*|\s*\Z)"

# "10x4 pushup", "4*10 bench press at 135lbs, 90s rest"
COUNT_BY_COUNT_GRAMMAR = r"(?P<first>\d+)[xX*](?P<second>\d+)\s+" + _NAME + _WEIGHT + _REST
# "10,10,8,6 pull ups", "135, 125, 115 deadlift at 200lbs"
REP_LIST_GRAMMAR = r"(?P<reps>\d+(?:,\s*\d+)+)\s+" + _NAME + _WEIGHT
# "5 sets of 10 pushups", "3 set of 12 squat"
WORDS_GRAMMAR = r"(?P<sets>\d+)\s+sets?\s+of\s+(?P<reps>\d+)\s+" + _NAME + _WEIGHT


class _OutOfRange(Exception):
    """A numeric capture that cannot be stored; the shape does not match."""


def _count(digits: str) -> int:
    # Length check first: int() refuses very long digit strings outright
    digits = digits.strip()
    if len(digits) > len(str(MAX_COUNT)) or int(digits) > MAX_COUNT:
        raise _OutOfRange(digits)
    return int(digits)


def _weight(m: re.Match) -> Optional[float]:
    if not m["weight"]:
        return None
    weight = float(m["weight"])
    if not math.isfinite(weight):
        raise _OutOfRange(m["weight"])
    return weight


def _round_half_up_mean(values: list[int]) -> int:
    """Mean of non-negative ints, .5 rounds up (8.5 -> 9)."""
    n = len(values)
    return (2 * sum(values) + n) // (2 * n)


def _fields_count_by_count(m: re.Match) -> Optional[dict]:
    first, second = _count(m["first"]), _count(m["second"])
    # Reps are usually the larger number: "10x4" and "4x10" both mean 4 sets of 10
    sets, reps = min(first, second), max(first, second)
    if sets < 1:
        return None
    rest = _count(m["rest"]) if m["rest"] else None
    return {
        "target_sets": sets,
        "target_reps": reps,
        "weight": _weight(m),
        "rest_seconds": rest or None,
    }


def _fields_rep_list(m: re.Match) -> Optional[dict]:
    completed = [_count(r) for r in m["reps"].split(",")]
    target = _round_half_up_mean(completed)
    if target < 1:
        return None
    return {
        "target_sets": len(completed),
        "target_reps": target,
        "weight": _weight(m),
        "completed_reps": completed,
    }


def _fields_words(m: re.Match) -> Optional[dict]:
    sets, reps = _count(m["sets"]), _count(m["reps"])
    if sets < 1 or reps < 1:
        return None
    return {"target_sets": sets, "target_reps": reps, "weight": _weight(m)}


class Shape:
    """One exercise grammar with its clause and prefix matchers."""

    def __init__(
        self,
        name: ShapeName,
        grammar: str,
        fields: Callable[[re.Match], Optional[dict]],
        clause_lead_in: bool = False,
    ):
        self.name = name
        self._fields = fields
        # clause_lead_in: the clause may start with unrecognized text ("did 10x4 pushup")
        if clause_lead_in:
            self._clause_re = re.compile(grammar + r"\s*\Z", re.IGNORECASE)
            self._clause_match = self._clause_re.search
        else:
            self._clause_re = re.compile(grammar, re.IGNORECASE)
            self._clause_match = self._clause_re.fullmatch
        self._prefix_re = re.compile(grammar + _CLAUSE_END, re.IGNORECASE)

    def match(self, clause: str) -> Optional[ShapeMatch]:
        """Recognize a whole (stripped) clause; None when it is not this shape."""
        m = self._clause_match(clause.strip())
        if not m:
            return None
        try:
            fields = self._fields(m)
        except _OutOfRange:
            return None
        if fields is None:
            return None
        return ShapeMatch(shape=self.name, span=m.group(0), raw_name=m["name"], **fields)

    def match_prefix(self, text: str) -> Optional[str]:
        """Span of text at position 0 that reads as this shape, including a trailing comma."""
        m = self._prefix_re.match(text)
        return m.group(0) if m else None

    def __repr__(self) -> str:
        return f"Shape({self.name!r})"


COUNT_BY_COUNT = Shape("count_by_count", COUNT_BY_COUNT_GRAMMAR, _fields_count_by_count, clause_lead_in=True)
REP_LIST = Shape("rep_list", REP_LIST_GRAMMAR, _fields_rep_list)
WORDS = Shape("words", WORDS_GRAMMAR, _fields_words)

# Fixed priority shared by clause parsing and segmentation
SHAPES: tuple[Shape, ...] = (COUNT_BY_COUNT, REP_LIST, WORDS)


def match_count_by_count(clause: str) -> Optional[ShapeMatch]:
    return COUNT_BY_COUNT.match(clause)


def match_rep_list(clause: str) -> Optional[ShapeMatch]:
    return REP_LIST.match(clause)


def match_words(clause: str) -> Optional[ShapeMatch]:
    return WORDS.match(clause)
