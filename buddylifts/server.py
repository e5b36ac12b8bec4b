"""MCP server: buddylifts.parse_exercises, buddylifts.parse_and_create, trainings, and read-only resources."""

from __future__ import annotations

import json
import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from .config import settings
from .errors import BuddyLiftsError
from .models import CreateTrainingInput, ParseAndCreateInput, ParseExercisesInput
from .service import create_training_impl, parse_and_create_impl, parse_exercises_impl
from .storage import Storage

logger = logging.getLogger(__name__)

_storage = Storage(settings.DB_PATH)

mcp = FastMCP(name="buddylifts")


def _tool_error(e: BuddyLiftsError) -> ToolError:
    return ToolError(f"{e.code}: {e.message}")


@mcp.tool(name="buddylifts.parse_exercises")
def buddylifts_parse_exercises(payload: dict) -> dict:
    """
    Parse natural language into structured exercises without saving.
    Accepts e.g. "10x4 pushup", "10,10,8,6 pull ups", "5 sets of 10 bench press at 135lbs";
    several exercises can be joined with commas or "and". "between" adds 60s rest between them.
    Returns { exercises: [{ name, target_sets, target_reps, weight, order, rest_seconds }], count }.
    """
    inp = ParseExercisesInput.model_validate(payload)
    try:
        result = parse_exercises_impl(inp)
    except BuddyLiftsError as e:
        raise _tool_error(e) from e
    return result.model_dump()


@mcp.tool(name="buddylifts.parse_and_create")
def buddylifts_parse_and_create(payload: dict) -> dict:
    """
    Parse natural language and store the exercises on a training owned by user_id.
    Set replace_existing=true to delete the training's current exercises first.
    """
    inp = ParseAndCreateInput.model_validate(payload)
    try:
        result = parse_and_create_impl(inp, _storage)
    except BuddyLiftsError as e:
        raise _tool_error(e) from e
    return result.model_dump()


@mcp.tool(name="buddylifts.create_training")
def buddylifts_create_training(payload: dict) -> dict:
    """Create an empty training for user_id. Returns the training with its training_id."""
    inp = CreateTrainingInput.model_validate(payload)
    return create_training_impl(inp, _storage).model_dump()


@mcp.resource("training://{training_id}/exercises", mime_type="application/json")
def resource_training_exercises(training_id: str) -> str:
    """Read-only: exercises of a training in order."""
    if _storage.get_training(training_id) is None:
        return json.dumps({"error": "training not found", "training_id": training_id})
    return json.dumps(_storage.get_exercises(training_id), indent=2)


def run() -> None:
    """Run the MCP server with stdio transport (default)."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting buddylifts MCP server (db=%s)", settings.DB_PATH)
    mcp.run()


if __name__ == "__main__":
    run()
