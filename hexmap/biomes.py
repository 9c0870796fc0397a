from __future__ import annotations
from enum import Enum
from typing import Dict, Tuple


class Biome(str, Enum):
    DESERT = "desert"
    GRASSLAND = "grassland"
    BADLANDS = "badlands"
    RIVERSIDE = "riverside"

    def __str__(self) -> str:
        return self.value


DESERT, GRASSLAND, BADLANDS, RIVERSIDE = (
    Biome.DESERT, Biome.GRASSLAND, Biome.BADLANDS, Biome.RIVERSIDE
)

# Terrain tile variants each biome may use (Kenney hexagon kit names)
BIOME_PALETTES: Dict[Biome, Tuple[str, ...]] = {
    Biome.DESERT: ("sand", "sand-desert", "sand-rocks"),
    Biome.GRASSLAND: ("grass", "grass-forest", "grass-hill"),
    Biome.BADLANDS: ("stone", "stone-hill", "stone-rocks", "stone-mountain"),
    Biome.RIVERSIDE: ("grass", "dirt", "water", "water-rocks"),
}

# Base tile laid under paths unless the ground is stone or water
PATH_GROUND = "dirt"


def classify_biome(elevation: float, moisture: float, *,
                   riverside_moisture: float = 0.8,
                   grassland_moisture: float = 0.45,
                   badlands_elevation: float = 0.55) -> Biome:
    """Classify one hex from its normalised elevation and moisture.

    Order of checks:
      1. Very wet -> riverside
      2. Moderately wet -> grassland
      3. Dry and elevated -> badlands
      4. Dry and low -> desert
    """
    if moisture >= riverside_moisture:
        return Biome.RIVERSIDE
    if moisture >= grassland_moisture:
        return Biome.GRASSLAND
    if elevation >= badlands_elevation:
        return Biome.BADLANDS
    return Biome.DESERT


def select_base_tile(biome: Biome, elevation: float, moisture: float,
                     variation: float) -> str:
    """Pick a palette tile for ``biome``; ``variation`` is a stream draw in [0,1)."""
    if biome is Biome.DESERT:
        if variation < 0.3:
            return "sand"
        if variation < 0.6:
            return "sand-desert"
        return "sand-rocks"
    if biome is Biome.GRASSLAND:
        if elevation > 0.5 and variation < 0.3:
            return "grass-hill"
        if variation < 0.2:
            return "grass-forest"
        return "grass"
    if biome is Biome.BADLANDS:
        if elevation > 0.85:
            return "stone-mountain"
        if variation < 0.3:
            return "stone-hill"
        if variation < 0.6:
            return "stone-rocks"
        return "stone"
    if biome is Biome.RIVERSIDE:
        if moisture > 0.97:
            return "water"
        if variation < 0.15:
            return "water-rocks"
        if variation < 0.55:
            return "grass"
        return "dirt"
    raise ValueError(f"unknown biome {biome!r}")
