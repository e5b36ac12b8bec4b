"""Service-level errors. The parser itself never raises on text."""

from __future__ import annotations

PARSE_HINT = "Try formats like '10x4 pushup' or '5 sets of 10 bench press'"


class BuddyLiftsError(Exception):
    """Base error; `code` follows HTTP-ish request codes."""

    code = "INTERNAL"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoExercisesRecognizedError(BuddyLiftsError):
    code = "BAD_REQUEST"

    def __init__(self, message: str | None = None):
        super().__init__(message or f"Could not parse any exercises. {PARSE_HINT}")


class TrainingNotFoundError(BuddyLiftsError):
    code = "NOT_FOUND"

    def __init__(self, training_id: str):
        super().__init__("Training not found")
        self.training_id = training_id


class TrainingAccessError(BuddyLiftsError):
    code = "FORBIDDEN"

    def __init__(self, training_id: str):
        super().__init__("You can only add exercises to your own trainings")
        self.training_id = training_id
