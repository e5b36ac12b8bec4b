"""
Free-text exercise parsing: "10x4 pushup, 10,10,8,6 pull ups between" -> ordered exercises.

Commas are ambiguous (they separate exercises and also the reps of a rep list), so
clause boundaries are found by recognizing where a complete shape match ends rather
than by splitting on commas. Pure and synchronous: unparseable text yields [], never
an exception.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .models import ExerciseRow, ParsedExercise
from .normalize import normalize_exercise_name
from .shapes import SHAPES

logger = logging.getLogger(__name__)

BETWEEN_REST_SECONDS = 60
MIN_CLAUSE_LENGTH = 3

_BETWEEN_RE = re.compile(r"\bbetween\b", re.IGNORECASE)
_AND_SPLIT_RE = re.compile(r"\s+and\s+", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*\Z")


def parse_exercise(clause: str) -> Optional[ParsedExercise]:
    """
    Parse one isolated clause. Shapes are tried in fixed priority
    (count x count, rep list, words); the first match wins.
    """
    for shape in SHAPES:
        match = shape.match(clause)
        if match is None:
            continue
        name = normalize_exercise_name(match.raw_name)
        if not name:
            return None
        return ParsedExercise(
            name=name,
            target_sets=match.target_sets,
            target_reps=match.target_reps,
            weight=match.weight,
            rest_seconds=match.rest_seconds,
            completed_reps=match.completed_reps,
        )
    return None


def _match_clause_prefix(text: str) -> Optional[str]:
    for shape in SHAPES:
        span = shape.match_prefix(text)
        if span is not None:
            return span
    return None


def segment_exercises(part: str) -> list[str]:
    """
    Split one and-free part into candidate clauses.

    Text that does not start a shape is carried one character at a time into a
    skip buffer, which is prepended to the next recognized clause (or emitted on
    its own at the end, where it usually fails to parse and is dropped).
    """
    segments: list[str] = []
    skipped = ""
    remaining = part.strip()
    while remaining:
        span = _match_clause_prefix(remaining)
        if span is not None:
            segments.append(skipped + _TRAILING_COMMA_RE.sub("", span))
            skipped = ""
            remaining = remaining[len(span):].strip()
            continue
        skipped += remaining[0]
        remaining = remaining[1:]
    if skipped.strip():
        segments.append(skipped.strip())
    return segments


def parse_exercise_input(text: str) -> list[ParsedExercise]:
    """
    Parse a whole free-text input into exercises, in source order.

    "between" anywhere in the input gives every exercise but the last a
    60-second rest.
    """
    has_between = bool(_BETWEEN_RE.search(text))
    exercises: list[ParsedExercise] = []

    for part in _AND_SPLIT_RE.split(text):
        for segment in segment_exercises(part):
            clause = _BETWEEN_RE.sub("", segment).strip()
            if len(clause) < MIN_CLAUSE_LENGTH:
                continue
            exercise = parse_exercise(clause)
            if exercise is None:
                logger.debug("Dropped unrecognized clause: %r", clause)
                continue
            exercises.append(exercise)

    if has_between:
        for exercise in exercises[:-1]:
            exercise.rest_seconds = BETWEEN_REST_SECONDS

    logger.debug("Parsed %d exercise(s) from %d chars", len(exercises), len(text))
    return exercises


def exercises_to_db_format(exercises: list[ParsedExercise]) -> list[ExerciseRow]:
    """Attach 0-based order; completed_reps is not stored."""
    return [
        ExerciseRow(
            name=ex.name,
            target_sets=ex.target_sets,
            target_reps=ex.target_reps,
            weight=ex.weight,
            order=index,
            rest_seconds=ex.rest_seconds,
        )
        for index, ex in enumerate(exercises)
    ]
