# generator.py - one-shot pipeline from seed to hex tile map
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import numpy as np

from .biomes import Biome, classify_biome, select_base_tile
from .config import HexMapConfig
from .hexgrid import HexCoord, hex_key
from .layers import MapLayers
from .noise import FieldSynthesizer
from .rivers import carve_rivers
from .settlements import plan_settlements

logger = logging.getLogger(__name__)

TileMap = Mapping[str, "HexTileData"]

_MASK64 = 0xFFFFFFFFFFFFFFFF
_SEED_HIGH = int(np.iinfo(np.int64).max)


@dataclass(frozen=True)
class HexTileData:
    """One generated hex.

    ``rotation`` and ``base_tile`` are cosmetic. ``river_piece``,
    ``path_piece`` and ``site_kind`` tell the scene layer which connector
    model to use and what a site is suited for.
    """

    coord: HexCoord
    biome: Biome
    base_tile: str
    rotation: int
    elevation: float
    moisture: float
    river_tile: bool = False
    path_tile: bool = False
    building_site: bool = False
    building: Optional[str] = None
    river_piece: Optional[str] = None
    path_piece: Optional[str] = None
    site_kind: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.biome, Biome):
            raise TypeError(f"biome must be a Biome, not {type(self.biome)}")
        if not 0 <= self.rotation <= 5:
            raise ValueError(f"rotation {self.rotation} outside [0, 5]")
        for name in ("elevation", "moisture"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} {value} outside [0, 1]")
        if self.building is not None and not self.building_site:
            raise ValueError("building requires building_site")

    @property
    def key(self) -> str:
        return hex_key(self.coord)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly dict using the scene layer's field names."""
        out: Dict[str, Any] = {
            "coord": {"q": self.coord.q, "r": self.coord.r},
            "biome": self.biome.value,
            "baseTile": self.base_tile,
            "rotation": self.rotation,
            "elevation": self.elevation,
            "moisture": self.moisture,
            "riverTile": self.river_tile,
            "pathTile": self.path_tile,
            "buildingSite": self.building_site,
        }
        for name, value in (("building", self.building), ("riverPiece", self.river_piece),
                            ("pathPiece", self.path_piece), ("siteKind", self.site_kind)):
            if value is not None:
                out[name] = value
        return out


class GeneratorState(Enum):
    CONFIGURED = "configured"
    GENERATED = "generated"


# =============================== PIPELINE =====================================

def synthesize_fields(config: HexMapConfig, rng: np.random.Generator) -> MapLayers:
    """Sample elevation and moisture for the whole region.

    Consumes two stream draws (the field lattice seeds).
    """
    layers = MapLayers.empty(config.width, config.height)
    elev_seed, moist_seed = (int(s) for s in rng.integers(0, _SEED_HIGH, size=2))
    synth = FieldSynthesizer(
        elev_seed, moist_seed,
        elevation_scale=config.elevation_scale,
        moisture_scale=config.moisture_scale,
        octaves=config.octaves,
        persistence=config.persistence,
        lacunarity=config.lacunarity,
    )
    layers.elevation, layers.moisture = synth.sample(layers.coords)
    return layers


def classify_layers(layers: MapLayers, rng: np.random.Generator,
                    config: HexMapConfig) -> None:
    """Biome, base tile and rotation for every hex in row-major order."""
    n = len(layers)
    variations = rng.random(n)
    rotations = rng.integers(0, 6, size=n)
    layers.biome = [
        classify_biome(
            float(layers.elevation[i]), float(layers.moisture[i]),
            riverside_moisture=config.riverside_moisture,
            grassland_moisture=config.grassland_moisture,
            badlands_elevation=config.badlands_elevation,
        )
        for i in range(n)
    ]
    layers.base_tile = [
        select_base_tile(layers.biome[i], float(layers.elevation[i]),
                         float(layers.moisture[i]), float(variations[i]))
        for i in range(n)
    ]
    layers.rotation[:] = rotations


def assemble(layers: MapLayers) -> TileMap:
    tiles: Dict[str, HexTileData] = {}
    for i, coord in enumerate(layers.coords):
        tiles[hex_key(coord)] = HexTileData(
            coord=coord,
            biome=layers.biome[i],
            base_tile=layers.base_tile[i],
            rotation=int(layers.rotation[i]),
            elevation=float(np.clip(layers.elevation[i], 0.0, 1.0)),
            moisture=float(np.clip(layers.moisture[i], 0.0, 1.0)),
            river_tile=bool(layers.river[i]),
            path_tile=bool(layers.path[i]),
            building_site=bool(layers.site[i]),
            building=layers.building[i],
            river_piece=layers.river_piece[i],
            path_piece=layers.path_piece[i],
            site_kind=layers.site_kind[i],
        )
    return MappingProxyType(tiles)


def summarize(tiles: TileMap) -> Dict[str, Any]:
    """Counts the CLI and tests care about."""
    biomes = Counter(t.biome.value for t in tiles.values())
    return {
        "tiles": len(tiles),
        "biomes": {b.value: biomes.get(b.value, 0) for b in Biome},
        "river_tiles": sum(1 for t in tiles.values() if t.river_tile),
        "path_tiles": sum(1 for t in tiles.values() if t.path_tile),
        "building_sites": sum(1 for t in tiles.values() if t.building_site),
        "buildings": sum(1 for t in tiles.values() if t.building is not None),
    }


# =============================== GENERATOR ====================================

class HexMapGenerator:
    """Deterministic hex map generator for one configuration.

    Each instance owns its configuration and its last result; no state is
    shared between instances. ``generate`` is a pure function of
    (seed, width, height) and the tuning knobs, so calling it twice without
    reseeding returns equal maps.
    """

    def __init__(self, config: Optional[HexMapConfig] = None, **overrides: Any) -> None:
        if config is None:
            config = HexMapConfig(**overrides)
        elif overrides:
            config = replace(config, **overrides)
        self._config = config
        self._tiles: Optional[TileMap] = None
        self._stale = True

    @property
    def config(self) -> HexMapConfig:
        return self._config

    @property
    def state(self) -> GeneratorState:
        if self._tiles is None or self._stale:
            return GeneratorState.CONFIGURED
        return GeneratorState.GENERATED

    @property
    def last_map(self) -> Optional[TileMap]:
        """Most recent ``generate`` result; stale after :meth:`reseed`."""
        return self._tiles

    def reseed(self, seed: int) -> None:
        """Use ``seed`` for the next :meth:`generate`; does not regenerate."""
        self._config = replace(self._config, seed=seed)
        self._stale = True

    def generate(self) -> TileMap:
        cfg = self._config
        # single stream for the whole run; draw order is fixed by the pass order
        rng = np.random.default_rng(cfg.seed & _MASK64)

        layers = synthesize_fields(cfg, rng)
        classify_layers(layers, rng, cfg)
        rivers = carve_rivers(layers, rng, cfg)
        plan = plan_settlements(layers, rng, cfg)
        tiles = assemble(layers)

        self._tiles = tiles
        self._stale = False
        logger.info(
            "generated %dx%d map seed=%s: %d tiles, %d rivers, %d sites, %d buildings",
            cfg.width, cfg.height, cfg.seed, len(tiles), len(rivers),
            len(plan.sites), len(plan.buildings),
        )
        return tiles


def generate_hex_map(config: Optional[HexMapConfig] = None, **overrides: Any) -> TileMap:
    return HexMapGenerator(config, **overrides).generate()


def create_hex_map_generator(config: Optional[HexMapConfig] = None,
                             **overrides: Any) -> HexMapGenerator:
    return HexMapGenerator(config, **overrides)
