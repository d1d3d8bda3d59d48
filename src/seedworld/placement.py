"""Point-of-interest placement: spawn plus best-effort spaced features."""

import structlog

from .config import GeneratorConfig
from .models import PoiKind, PointOfInterest
from .rng import RandomStream
from .types import Position

logger = structlog.get_logger()


def place_points_of_interest(
    rng: RandomStream,
    config: GeneratorConfig,
) -> list[PointOfInterest]:
    """Place the spawn POI and up to ``poi.count`` additional POIs.

    Positions are drawn inside the configured margin and rejected when
    closer than ``poi.min_distance`` (Euclidean) to any POI already placed,
    spawn included. A POI that cannot find a slot within ``max_attempts``
    draws is skipped, so fewer POIs than requested is a normal outcome.

    Args:
        rng: World random stream.
        config: Generator configuration.

    Returns:
        POIs in placement order, spawn first.
    """
    poi_config = config.poi
    spawn = PointOfInterest(
        position=Position(x=config.width // 2, y=config.height // 2),
        kind=PoiKind.SPAWN,
    )
    placed = [spawn]
    dungeons_left = poi_config.dungeon_cap

    span_x = config.width - 2 * poi_config.margin
    span_y = config.height - 2 * poi_config.margin

    for index in range(poi_config.count):
        position = None
        for _ in range(poi_config.max_attempts):
            candidate = Position(
                x=poi_config.margin + rng.below(span_x),
                y=poi_config.margin + rng.below(span_y),
            )
            if all(
                candidate.distance(other.position) >= poi_config.min_distance
                for other in placed
            ):
                position = candidate
                break

        if position is None:
            logger.debug("poi_skipped", index=index, attempts=poi_config.max_attempts)
            continue

        if dungeons_left > 0 and rng.chance(poi_config.dungeon_chance):
            kind = PoiKind.DUNGEON
            dungeons_left -= 1
        else:
            kind = rng.weighted([
                (PoiKind.RUIN, poi_config.ruin_weight),
                (PoiKind.HOUSE, poi_config.house_weight),
            ])
        placed.append(PointOfInterest(position=position, kind=kind))

    logger.debug(
        "pois_placed",
        requested=poi_config.count,
        placed=len(placed) - 1,
        dungeons=poi_config.dungeon_cap - dungeons_left,
    )
    return placed
