"""Tunable parameters for hex map generation.

``HexMapConfig`` is validated as soon as it is built, so a bad width or an
out-of-range percentile fails before any generation work starts.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping
import logging
import math

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised for invalid generator configuration values."""


@dataclass(frozen=True)
class HexMapConfig:
    # Core inputs. The region is ``width`` x ``height`` hexes in odd-r rows,
    # which holds exactly width * height tiles.
    seed: int = 42
    width: int = 32
    height: int = 32

    # Field synthesis
    elevation_scale: float = 0.09
    moisture_scale: float = 0.11
    octaves: int = 4
    persistence: float = 0.5
    lacunarity: float = 2.0

    # Biome thresholds against normalised fields
    riverside_moisture: float = 0.8
    grassland_moisture: float = 0.45
    badlands_elevation: float = 0.55

    # Rivers
    river_count: int = 3
    river_source_percentile: float = 0.85
    river_sink_elevation: float = 0.2
    river_moisture_boost: float = 0.35

    # Settlements
    site_density: float = 0.02
    min_sites: int = 2
    max_sites: int = 12
    site_spacing: int = 4
    edge_margin: int = 2
    building_chance: float = 0.7

    def __post_init__(self) -> None:
        for name in ("seed", "width", "height", "octaves", "river_count",
                     "min_sites", "max_sites", "site_spacing", "edge_margin"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an int, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"width and height must be positive, got {self.width}x{self.height}")
        for name in ("elevation_scale", "moisture_scale", "lacunarity"):
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
        for name in ("persistence", "riverside_moisture", "grassland_moisture",
                     "badlands_elevation", "river_source_percentile",
                     "river_sink_elevation", "river_moisture_boost",
                     "site_density", "building_chance"):
            value = getattr(self, name)
            if not _is_number(value) or not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must lie in [0, 1], got {value!r}")
        if self.octaves < 1:
            raise ConfigurationError("octaves must be >= 1")
        for name in ("river_count", "min_sites", "max_sites", "site_spacing", "edge_margin"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} cannot be negative")
        if self.min_sites > self.max_sites:
            raise ConfigurationError("min_sites cannot exceed max_sites")
        if self.grassland_moisture > self.riverside_moisture:
            raise ConfigurationError("grassland_moisture cannot exceed riverside_moisture")

    @property
    def area(self) -> int:
        return self.width * self.height

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HexMapConfig":
        """Build a config from loosely typed values (CLI flags, JSON).

        Unknown keys are ignored with a warning. Values are coerced to the
        field's type; anything that cannot be coerced raises
        :class:`ConfigurationError`.
        """
        kinds = {f.name: f.type for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in kinds:
                logger.warning("HexMapConfig: ignoring unknown key %r", key)
                continue
            if value is None:
                continue
            if kinds[key] in (int, "int"):
                kwargs[key] = _to_int(key, value)
            else:
                kwargs[key] = _to_float(key, value)
        return cls(**kwargs)


def _is_number(value: Any) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        if s.isascii() and (s.isdigit() or (s[:1] in {"+", "-"} and s[1:].isdigit())):
            return int(s)
    raise ConfigurationError(f"{name}: cannot interpret {value!r} as an int")


def _to_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name}: cannot interpret {value!r} as a number")
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name}: cannot interpret {value!r} as a number") from None
    if not math.isfinite(f):
        raise ConfigurationError(f"{name}: {value!r} is not finite")
    return f
