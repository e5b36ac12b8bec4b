"""Service operations: preview parse, parse-and-create with ownership and replace."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from buddylifts.errors import NoExercisesRecognizedError, TrainingAccessError, TrainingNotFoundError
from buddylifts.models import CreateTrainingInput, ParseAndCreateInput, ParsedExercise, ParseExercisesInput
from buddylifts.service import create_training_impl, parse_and_create_impl, parse_exercises_impl
from buddylifts.storage import Storage


@pytest.fixture
def storage():
    with tempfile.TemporaryDirectory() as tmp:
        s = Storage(str(Path(tmp) / "test.db"))
        yield s
        s.close()


def test_parse_exercises_returns_db_rows() -> None:
    result = parse_exercises_impl(ParseExercisesInput(input="10x4 pushup, 10,10,8,6 pull ups between"))
    assert result.count == 2
    assert [ex.name for ex in result.exercises] == ["Pushup", "Pull Ups"]
    assert [ex.order for ex in result.exercises] == [0, 1]
    assert result.exercises[0].rest_seconds == 60


def test_parse_exercises_nothing_recognized_raises_with_hint() -> None:
    with pytest.raises(NoExercisesRecognizedError) as exc:
        parse_exercises_impl(ParseExercisesInput(input="hello world"))
    assert exc.value.code == "BAD_REQUEST"
    assert "10x4 pushup" in exc.value.message


@pytest.mark.parametrize("text", ["ab", "x" * 501])
def test_input_length_enforced_by_caller_model(text: str) -> None:
    with pytest.raises(ValidationError):
        ParseExercisesInput(input=text)


def test_parse_and_create_stores_in_order(storage: Storage) -> None:
    training = create_training_impl(CreateTrainingInput(user_id="u1", name="Push day"), storage)
    assert training.user_id == "u1"

    result = parse_and_create_impl(
        ParseAndCreateInput(
            user_id="u1",
            training_id=training.training_id,
            input="5 sets of 10 bench press at 135lbs and 10x4 pushup",
        ),
        storage,
    )
    assert result.count == 2
    assert [ex.training_id for ex in result.exercises] == [training.training_id] * 2
    assert all(ex.exercise_id.startswith("ex_") for ex in result.exercises)

    rows = storage.get_exercises(training.training_id)
    assert [r["name"] for r in rows] == ["Bench Press", "Pushup"]
    assert [r["order"] for r in rows] == [0, 1]
    assert rows[0]["weight"] == 135
    assert rows[0]["target_sets"] == 5 and rows[0]["target_reps"] == 10
    assert rows[1]["weight"] is None


def test_parse_and_create_appends_or_replaces(storage: Storage) -> None:
    training = create_training_impl(CreateTrainingInput(user_id="u1", name="Legs"), storage)
    tid = training.training_id

    parse_and_create_impl(ParseAndCreateInput(user_id="u1", training_id=tid, input="5x5 squat"), storage)
    parse_and_create_impl(ParseAndCreateInput(user_id="u1", training_id=tid, input="3x10 lunges"), storage)
    assert len(storage.get_exercises(tid)) == 2

    parse_and_create_impl(
        ParseAndCreateInput(user_id="u1", training_id=tid, input="4x8 deadlift", replace_existing=True),
        storage,
    )
    rows = storage.get_exercises(tid)
    assert [r["name"] for r in rows] == ["Deadlift"]


def test_parse_and_create_unknown_training(storage: Storage) -> None:
    with pytest.raises(TrainingNotFoundError) as exc:
        parse_and_create_impl(ParseAndCreateInput(user_id="u1", training_id="trn_missing", input="5x5 squat"), storage)
    assert exc.value.code == "NOT_FOUND"


def test_parse_and_create_other_users_training(storage: Storage) -> None:
    training = create_training_impl(CreateTrainingInput(user_id="owner", name="Mine"), storage)
    with pytest.raises(TrainingAccessError) as exc:
        parse_and_create_impl(
            ParseAndCreateInput(user_id="intruder", training_id=training.training_id, input="5x5 squat"),
            storage,
        )
    assert exc.value.code == "FORBIDDEN"
    assert storage.get_exercises(training.training_id) == []


def test_parse_and_create_nothing_recognized_keeps_existing(storage: Storage) -> None:
    training = create_training_impl(CreateTrainingInput(user_id="u1", name="Legs"), storage)
    tid = training.training_id
    parse_and_create_impl(ParseAndCreateInput(user_id="u1", training_id=tid, input="5x5 squat"), storage)

    with pytest.raises(NoExercisesRecognizedError):
        parse_and_create_impl(
            ParseAndCreateInput(user_id="u1", training_id=tid, input="just vibes", replace_existing=True),
            storage,
        )
    assert [r["name"] for r in storage.get_exercises(tid)] == ["Squat"]


@pytest.mark.parametrize(
    "text",
    [
        "99999999999999999999x99999999999999999999 pushup",
        "3x8 curls at " + "9" * 400 + "lbs",
    ],
)
def test_parse_and_create_rejects_numbers_too_large_to_store(storage: Storage, text: str) -> None:
    training = create_training_impl(CreateTrainingInput(user_id="u1", name="Arms"), storage)
    with pytest.raises(NoExercisesRecognizedError):
        parse_and_create_impl(
            ParseAndCreateInput(user_id="u1", training_id=training.training_id, input=text),
            storage,
        )
    assert storage.get_exercises(training.training_id) == []


def test_parsed_exercise_refuses_unstorable_values() -> None:
    with pytest.raises(ValidationError):
        ParsedExercise(name="Pushup", target_sets=1, target_reps=2**63)
    with pytest.raises(ValidationError):
        ParsedExercise(name="Curls", target_sets=3, target_reps=8, weight=float("inf"))
