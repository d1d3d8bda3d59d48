"""Map export: save and load generated maps as JSON.

The files follow the game client's map schema (``id``, ``tiles``,
``interactables``, ``enemies``, ``portals``, ``theme``) with camelCase
keys. This is an export format, not a save-game format.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from .models import GeneratedWorld, MapData

logger = structlog.get_logger()

FORMAT_VERSION = 1


def map_to_dict(map_data: MapData) -> dict[str, Any]:
    """JSON-ready dict of one map."""
    return map_data.model_dump(by_alias=True, mode="json")


def world_to_dict(world: GeneratedWorld) -> dict[str, Any]:
    """JSON-ready dict of a whole world, with export metadata."""
    data = world.model_dump(by_alias=True, mode="json")
    data["metadata"] = {
        "version": FORMAT_VERSION,
        "generatedAt": datetime.now(timezone.utc).isoformat(),
    }
    return data


def save_world(path: Path, world: GeneratedWorld) -> None:
    """Save a generated world to a JSON file.

    Args:
        path: Output path (should end with .json).
        world: World to save.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(world_to_dict(world), f)

    size_kb = path.stat().st_size / 1024
    logger.info("world_saved", path=str(path), seed=world.seed, size_kb=round(size_kb, 1))


def save_map(path: Path, map_data: MapData) -> None:
    """Save a single map to a JSON file in the client's map schema."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(map_to_dict(map_data), f)
    logger.info("map_saved", path=str(path), map_id=map_data.id)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")
    with open(path) as f:
        return json.load(f)


def load_map(path: Path) -> MapData:
    """Load a map saved with ``save_map``.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If the file does not hold a valid map.
    """
    data = _read_json(path)
    try:
        map_data = MapData.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid map file {path}: {e}") from e
    logger.info("map_loaded", path=str(path), map_id=map_data.id, width=map_data.width,
                height=map_data.height)
    return map_data


def load_world(path: Path) -> GeneratedWorld:
    """Load a world saved with ``save_world``.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If the file does not hold a valid world.
    """
    data = _read_json(path)
    data.pop("metadata", None)
    try:
        world = GeneratedWorld.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid world file {path}: {e}") from e
    logger.info("world_loaded", path=str(path), seed=world.seed, maps=len(world.maps))
    return world
