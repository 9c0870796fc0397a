"""Building sites, the path network joining them, and building placement.

The planner runs three passes in order:

1. pick spaced-out building sites away from rivers and the map edge,
2. grow a connector tree from the town centre, joining the nearest
   unconnected site each round and marking the shortest walk as path,
3. place buildings on the town centre and a random subset of other sites.

All random choices come from the generator's stream, and every loop runs
over coordinates in row-major order so results never depend on set or dict
iteration order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from .biomes import Biome, PATH_GROUND
from .config import HexMapConfig
from .hexgrid import (
    HexCoord, connection_shape, distance, edge_distance,
    region_center, row_major,
)
from .layers import MapLayers
from .pathfinding import astar

logger = logging.getLogger(__name__)

TOWN, MINE, FARM, OUTPOST = "town", "mine", "farm", "outpost"

# Building variants per site kind; a stream draw picks first or second
SITE_BUILDINGS: Dict[str, Tuple[str, str]] = {
    TOWN: ("building-village", "building-market"),
    MINE: ("building-mine", "building-mine"),
    FARM: ("building-farm", "building-cabin"),
    OUTPOST: ("building-tower", "building-cabin"),
}


@dataclass
class SettlementPlan:
    sites: List[HexCoord] = field(default_factory=list)
    anchor: Optional[HexCoord] = None
    joins: List[Tuple[HexCoord, HexCoord]] = field(default_factory=list)
    buildings: Dict[HexCoord, str] = field(default_factory=dict)


def site_kind(biome: Biome, elevation: float, base_tile: str) -> str:
    """What a site is suited for, judged from its terrain."""
    if biome is Biome.RIVERSIDE and elevation < 0.5:
        return TOWN
    if (biome is Biome.BADLANDS or base_tile.startswith("stone")) and elevation > 0.5:
        return MINE
    if biome is Biome.GRASSLAND:
        return FARM
    return OUTPOST


def target_site_count(config: HexMapConfig) -> int:
    """Sites scale with map area, clamped to [min_sites, max_sites]."""
    n = int(round(config.area * config.site_density))
    return max(config.min_sites, min(config.max_sites, n))


def select_sites(layers: MapLayers, rng: np.random.Generator,
                 config: HexMapConfig) -> List[HexCoord]:
    candidates = [
        i for i, c in enumerate(layers.coords)
        if not layers.river[i]
        and edge_distance(c, layers.width, layers.height) >= config.edge_margin
    ]
    order = rng.permutation(len(candidates))
    target = target_site_count(config)
    chosen: List[HexCoord] = []
    for k in order:
        if len(chosen) >= target:
            break
        c = layers.coords[candidates[int(k)]]
        if any(distance(c, s) < config.site_spacing for s in chosen):
            continue
        chosen.append(c)

    if len(chosen) < target:
        logger.debug("placed %d of %d building sites", len(chosen), target)
    for c in chosen:
        i = layers.index[c]
        layers.site[i] = True
        layers.site_kind[i] = site_kind(layers.biome[i], layers.elevation[i], layers.base_tile[i])
    return sorted(chosen, key=row_major)


def town_center(sites: List[HexCoord], width: int, height: int) -> Optional[HexCoord]:
    """The site nearest the middle of the region (ties by row-major order)."""
    if not sites:
        return None
    mid = region_center(width, height)
    return min(sites, key=lambda s: (distance(s, mid), row_major(s)))


def apply_path(layers: MapLayers, walk: List[HexCoord]) -> None:
    for pos, coord in enumerate(walk):
        i = layers.index[coord]
        layers.path[i] = True
        if layers.river[i]:
            # bridge: keep the river's rotation
            layers.path_piece[i] = "path-crossing"
            continue
        if layers.path_piece[i] is not None:
            layers.path_piece[i] = "path-crossing"
        else:
            prev = walk[pos - 1] if pos > 0 else None
            nxt = walk[pos + 1] if pos + 1 < len(walk) else None
            shape, rotation = connection_shape(coord, prev, nxt)
            layers.path_piece[i] = f"path-{shape}"
            layers.rotation[i] = rotation
        tile = layers.base_tile[i]
        if "water" not in tile and not tile.startswith("stone"):
            layers.base_tile[i] = PATH_GROUND


def connect_sites(layers: MapLayers, sites: List[HexCoord],
                  anchor: HexCoord) -> List[Tuple[HexCoord, HexCoord]]:
    """Join every site to the network, nearest unconnected site first."""
    connected = [anchor]
    remaining = sorted((s for s in sites if s != anchor), key=row_major)
    joins: List[Tuple[HexCoord, HexCoord]] = []
    while remaining:
        _, _, _, site, hub = min(
            (distance(s, c), row_major(s), row_major(c), s, c)
            for s in remaining for c in connected
        )
        walk = astar(hub, site, layers.contains)
        apply_path(layers, walk)
        logger.debug("path %s -> %s (%d hexes)", hub, site, len(walk))
        joins.append((hub, site))
        connected.append(site)
        remaining.remove(site)
    return joins


def place_buildings(layers: MapLayers, sites: List[HexCoord], anchor: Optional[HexCoord],
                    rng: np.random.Generator, config: HexMapConfig) -> Dict[HexCoord, str]:
    """The town centre always gets a building; other sites roll for one."""
    placed: Dict[HexCoord, str] = {}
    if anchor is None:
        return placed

    def build(coord: HexCoord, variant: float) -> None:
        i = layers.index[coord]
        options = SITE_BUILDINGS[layers.site_kind[i]]
        name = options[0] if variant < 0.5 else options[1]
        layers.building[i] = name
        placed[coord] = name

    build(anchor, float(rng.random()))
    for s in sites:
        if s == anchor:
            continue
        occupy, variant = rng.random(2)
        if occupy < config.building_chance:
            build(s, float(variant))
    return placed


def plan_settlements(layers: MapLayers, rng: np.random.Generator,
                     config: HexMapConfig) -> SettlementPlan:
    sites = select_sites(layers, rng, config)
    anchor = town_center(sites, layers.width, layers.height)
    plan = SettlementPlan(sites=sites, anchor=anchor)
    if anchor is None:
        logger.debug("no building sites; skipping paths and buildings")
        return plan
    plan.joins = connect_sites(layers, sites, anchor)
    plan.buildings = place_buildings(layers, sites, anchor, rng, config)
    return plan
