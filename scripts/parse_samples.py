#!/usr/bin/env python3
"""
Run sample sentences (or your own) through the buddylifts parser.
Uses the buddylifts package directly (no MCP server needed).
Usage: python scripts/parse_samples.py ["10x4 pushup, 5x5 squat" ...]
"""
from __future__ import annotations

import sys
from pathlib import Path

# Project root = parent of scripts/
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from buddylifts.parser import exercises_to_db_format, parse_exercise_input


SAMPLES = [
    "10x4 pushup",
    "10,10,8,6 pull ups",
    "5 sets of 10 pushups",
    "10x4 pushup, 10,10,8,6 pull ups between",
    "5x12 bench press at 135lbs and 3 sets of 8 rows with 20kg",
    "10x4 pushup, 90s rest, 5x5 squat",
    "warmup then 10x4 pushup, then stretch",
    "hello world and foo bar",
]


def main() -> None:
    inputs = sys.argv[1:] or SAMPLES
    for text in inputs:
        print(f"\n{'='*60}")
        print(f"INPUT: {text}")
        print("=" * 60)

        exercises = parse_exercise_input(text)
        if not exercises:
            print("(no exercises recognized)")
            continue
        for ex, row in zip(exercises, exercises_to_db_format(exercises)):
            line = f"  {row.order}. {ex.name}: {ex.target_sets}x{ex.target_reps}"
            if ex.weight is not None:
                line += f" @ {ex.weight:g}"
            if ex.rest_seconds is not None:
                line += f", rest {ex.rest_seconds}s"
            if ex.completed_reps:
                line += f"  (done: {', '.join(str(r) for r in ex.completed_reps)})"
            print(line)


if __name__ == "__main__":
    main()
