# hexmap/__init__.py
# Package init for the procedural hex map generator

from .hexgrid import (
    HexCoord, ParseError, HEX_DIRECTIONS, SQRT3,
    hex_key, parse_hex_key, hex_distance, hex_neighbors, hex_direction,
    hex_to_world, world_to_hex, hex_round, hex_line, region_coords,
)
from .noise import FieldSynthesizer, fbm, value_noise
from .biomes import Biome, BIOME_PALETTES, classify_biome, select_base_tile
from .config import ConfigurationError, HexMapConfig
from .generator import (
    GeneratorState,
    HexMapGenerator,
    HexTileData,
    create_hex_map_generator,
    generate_hex_map,
    summarize,
)

__all__ = [
    "HexCoord", "ParseError", "HEX_DIRECTIONS", "SQRT3",
    "hex_key", "parse_hex_key", "hex_distance", "hex_neighbors", "hex_direction",
    "hex_to_world", "world_to_hex", "hex_round", "hex_line", "region_coords",
    "FieldSynthesizer", "fbm", "value_noise",
    "Biome", "BIOME_PALETTES", "classify_biome", "select_base_tile",
    "ConfigurationError", "HexMapConfig",
    "GeneratorState", "HexMapGenerator", "HexTileData",
    "create_hex_map_generator", "generate_hex_map", "summarize",
]
