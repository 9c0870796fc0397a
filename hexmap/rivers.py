# rivers.py - steepest-descent river tracing over the elevation field
from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .biomes import Biome, select_base_tile
from .config import HexMapConfig
from .hexgrid import HexCoord, connection_shape, neighbors_axial
from .layers import MapLayers

logger = logging.getLogger(__name__)


def river_sources(layers: MapLayers, percentile: float) -> List[int]:
    """Indices of interior hexes at or above the elevation ``percentile``."""
    threshold = float(np.quantile(layers.elevation, percentile))
    return [
        i for i, c in enumerate(layers.coords)
        if layers.elevation[i] >= threshold and not layers.is_edge(c)
    ]


def trace_river(layers: MapLayers, source: HexCoord, sink_elevation: float,
                max_steps: int) -> Optional[List[HexCoord]]:
    """Walk downhill from ``source`` until the river can end.

    Each step moves to the lowest in-region neighbour that is not already on
    this river and does not touch it anywhere except the current hex, so the
    river stays a simple path. Ties go to the earlier neighbour direction.

    The walk ends on the region edge, below ``sink_elevation``, or on a hex
    of an earlier river (a merge). ``None`` means no valid end was reached
    within ``max_steps`` or the walk boxed itself in.
    """
    path = [source]
    visited = {source}
    current = source
    while True:
        i = layers.index[current]
        if len(path) > 1 and (
            layers.river[i]
            or layers.is_edge(current)
            or layers.elevation[i] < sink_elevation
        ):
            return path
        if len(path) > max_steps:
            return None

        best = None
        best_elev = float("inf")
        for n in layers.neighbors(current):
            if n in visited:
                continue
            if any(m in visited and m != current for m in neighbors_axial(*n)):
                continue
            e = float(layers.elevation[layers.index[n]])
            if e < best_elev:
                best, best_elev = n, e
        if best is None:
            return None
        path.append(best)
        visited.add(best)
        current = best


def apply_river(layers: MapLayers, path: List[HexCoord], rng: np.random.Generator,
                config: HexMapConfig) -> None:
    """Mark ``path`` as river and wet the ground around it."""
    variations = rng.random((len(path), 2))
    boost = config.river_moisture_boost
    for pos, coord in enumerate(path):
        i = layers.index[coord]
        if layers.river[i]:
            # merge point keeps the earlier river's piece
            continue
        prev = path[pos - 1] if pos > 0 else None
        nxt = path[pos + 1] if pos + 1 < len(path) else None
        shape, rotation = connection_shape(coord, prev, nxt)
        layers.river[i] = True
        layers.river_piece[i] = f"river-{shape}"
        layers.rotation[i] = rotation
        layers.moisture[i] = min(1.0, layers.moisture[i] + boost)
        layers.biome[i] = Biome.RIVERSIDE
        layers.base_tile[i] = select_base_tile(
            Biome.RIVERSIDE, layers.elevation[i], layers.moisture[i], variations[pos, 0])

    for pos, coord in enumerate(path):
        for n in layers.neighbors(coord):
            j = layers.index[n]
            if layers.river[j]:
                continue
            layers.moisture[j] = min(1.0, layers.moisture[j] + boost / 2.0)
            if (layers.biome[j] is not Biome.RIVERSIDE
                    and layers.moisture[j] >= config.riverside_moisture):
                layers.biome[j] = Biome.RIVERSIDE
                layers.base_tile[j] = select_base_tile(
                    Biome.RIVERSIDE, layers.elevation[j], layers.moisture[j], variations[pos, 1])


def carve_rivers(layers: MapLayers, rng: np.random.Generator,
                 config: HexMapConfig) -> List[List[HexCoord]]:
    """Trace up to ``config.river_count`` rivers and apply them to ``layers``.

    Sources are tried in a stream-drawn permutation of the sorted candidate
    list. Maps with no usable source simply get no rivers.
    """
    candidates = river_sources(layers, config.river_source_percentile)
    order = rng.permutation(len(candidates))
    max_steps = 2 * max(layers.width, layers.height)
    rivers: List[List[HexCoord]] = []
    for k in order:
        if len(rivers) >= config.river_count:
            break
        src_idx = candidates[int(k)]
        if layers.river[src_idx]:
            continue
        source = layers.coords[src_idx]
        path = trace_river(layers, source, config.river_sink_elevation, max_steps)
        if path is None:
            logger.debug("discarded river trace from %s", source)
            continue
        apply_river(layers, path, rng, config)
        rivers.append(path)
    if len(rivers) < config.river_count:
        logger.debug("carved %d of %d requested rivers", len(rivers), config.river_count)
    return rivers
