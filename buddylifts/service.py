"""Service operations over the parser: preview, parse-and-create, trainings."""

from __future__ import annotations

import logging

from .errors import NoExercisesRecognizedError, TrainingAccessError, TrainingNotFoundError
from .models import (
    CreateTrainingInput,
    ParseAndCreateInput,
    ParseAndCreateOutput,
    ParseExercisesInput,
    ParseExercisesOutput,
    PersistedExercise,
    Training,
)
from .parser import exercises_to_db_format, parse_exercise_input
from .storage import Storage

logger = logging.getLogger(__name__)


def parse_exercises_impl(payload: ParseExercisesInput) -> ParseExercisesOutput:
    """Parse without saving. Raises NoExercisesRecognizedError when nothing is recognized."""
    exercises = parse_exercise_input(payload.input)
    if not exercises:
        raise NoExercisesRecognizedError()
    rows = exercises_to_db_format(exercises)
    return ParseExercisesOutput(exercises=rows, count=len(rows))


def parse_and_create_impl(payload: ParseAndCreateInput, storage: Storage) -> ParseAndCreateOutput:
    """
    Parse and store exercises for a training the caller owns.
    With replace_existing, the training's current exercises are deleted in the
    same transaction as the insert.
    """
    training = storage.get_training(payload.training_id)
    if training is None:
        raise TrainingNotFoundError(payload.training_id)
    if training["user_id"] != payload.user_id:
        logger.warning(
            "User %s tried to add exercises to training %s owned by %s",
            payload.user_id,
            payload.training_id,
            training["user_id"],
        )
        raise TrainingAccessError(payload.training_id)

    exercises = parse_exercise_input(payload.input)
    if not exercises:
        raise NoExercisesRecognizedError()

    stored = storage.insert_exercises(
        payload.training_id,
        exercises_to_db_format(exercises),
        replace_existing=payload.replace_existing,
    )
    created = [PersistedExercise.model_validate(row) for row in stored]
    return ParseAndCreateOutput(exercises=created, count=len(created))


def create_training_impl(payload: CreateTrainingInput, storage: Storage) -> Training:
    row = storage.create_training(payload.user_id, payload.name, payload.description)
    return Training.model_validate(row)
