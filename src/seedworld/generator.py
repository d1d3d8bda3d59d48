"""World assembly: runs every generation pass over one seeded stream."""

import structlog

from .config import GeneratorConfig, check_layout
from .grid import new_grid
from .models import GeneratedWorld, MapData
from .noise import NoiseChannels
from .placement import place_points_of_interest
from .rng import RandomStream, resolve_seed
from .roads import build_road_network
from .structures import WORLD_MAP_ID, build_structures, scatter_wayside
from .terrain import synthesize_terrain
from .tiles import MapTheme, TileType
from .validation import validate_world

logger = structlog.get_logger()


def generate_world(
    seed: int | None = None,
    config: GeneratorConfig | None = None,
) -> GeneratedWorld:
    """Generate a complete world from a seed.

    The passes share a single random stream and run in a fixed order:
    POI placement, terrain, roads, structures, wayside decoration. The
    same seed and configuration always produce the same world.

    Args:
        seed: World seed. ``None`` derives one from the clock.
        config: Generator configuration. Defaults to ``GeneratorConfig()``.

    Returns:
        GeneratedWorld with the exterior map, interiors and spawn.

    Raises:
        ConfigurationError: If the configuration cannot hold the layout.
    """
    config = config or GeneratorConfig()
    check_layout(config)
    seed = resolve_seed(seed)
    tile_size = config.tile_size

    logger.info("world_generation_started", seed=seed, width=config.width, height=config.height)

    rng = RandomStream(seed)
    channels = NoiseChannels.from_seed(seed)
    grid = new_grid(config.width, config.height, TileType.GRASS)

    # Stage A: points of interest
    pois = place_points_of_interest(rng, config)

    # Stage B: terrain and wild enemies
    enemies = synthesize_terrain(grid, pois, channels, rng, config)

    # Stage C: roads between POIs
    build_road_network(grid, pois, rng, config)

    # Stage D: structures, interiors and portals
    structures = build_structures(grid, pois, rng, seed, config)

    # Stage E: wayside items and travellers
    wayside = scatter_wayside(grid, pois, rng, config)

    world_map = MapData(
        id=WORLD_MAP_ID,
        tiles=grid,
        interactables=tuple(structures.interactables + wayside),
        enemies=tuple(enemies),
        portals=tuple(structures.portals),
        theme=MapTheme.OUTDOOR,
    )
    world = GeneratedWorld(
        seed=seed,
        tile_size=tile_size,
        world_map=world_map,
        interior_maps={k: structures.interiors[k] for k in sorted(structures.interiors)},
        spawn=pois[0].position.scaled(tile_size),
        pois=tuple(pois),
    )

    logger.info(
        "world_generated",
        seed=seed,
        pois=len(pois),
        interiors=len(world.interior_maps),
        enemies=len(world_map.enemies),
        portals=len(world_map.portals),
    )

    validate_world(world, config)
    return world
