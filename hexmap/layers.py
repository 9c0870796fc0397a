"""Per-hex working arrays shared by the generation passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
import numpy as np

from .biomes import Biome
from .hexgrid import HexCoord, in_region, neighbors_axial, on_edge, region_coords


@dataclass
class MapLayers:
    """Flat arrays indexed like ``coords`` (sorted by row, then column).

    Passes mutate these in place; the assembler freezes them into tile
    records once the pipeline has finished.
    """

    width: int
    height: int
    coords: List[HexCoord]
    elevation: np.ndarray
    moisture: np.ndarray
    biome: List[Biome] = field(default_factory=list)
    base_tile: List[str] = field(default_factory=list)
    rotation: np.ndarray = field(default=None)  # type: ignore[assignment]
    river: np.ndarray = field(default=None)  # type: ignore[assignment]
    path: np.ndarray = field(default=None)  # type: ignore[assignment]
    site: np.ndarray = field(default=None)  # type: ignore[assignment]
    river_piece: List[Optional[str]] = field(default_factory=list)
    path_piece: List[Optional[str]] = field(default_factory=list)
    site_kind: List[Optional[str]] = field(default_factory=list)
    building: List[Optional[str]] = field(default_factory=list)
    index: Dict[HexCoord, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        n = len(self.coords)
        for name in ("elevation", "moisture"):
            arr = getattr(self, name)
            if arr.shape != (n,):
                raise ValueError(f"{name} shape {arr.shape} != {(n,)}")
        if self.rotation is None:
            self.rotation = np.zeros(n, dtype=np.int8)
        for name in ("river", "path", "site"):
            if getattr(self, name) is None:
                setattr(self, name, np.zeros(n, dtype=bool))
        for name in ("river_piece", "path_piece", "site_kind", "building"):
            if not getattr(self, name):
                setattr(self, name, [None] * n)
        self.index = {c: i for i, c in enumerate(self.coords)}

    @classmethod
    def empty(cls, width: int, height: int) -> "MapLayers":
        coords = region_coords(width, height)
        n = len(coords)
        return cls(width, height, coords,
                   np.zeros(n, dtype=np.float64), np.zeros(n, dtype=np.float64))

    def __len__(self) -> int:
        return len(self.coords)

    def contains(self, coord: HexCoord) -> bool:
        return in_region(coord, self.width, self.height)

    def is_edge(self, coord: HexCoord) -> bool:
        return on_edge(coord, self.width, self.height)

    def neighbors(self, coord: HexCoord) -> Iterator[HexCoord]:
        """In-region neighbours in direction order."""
        for n in neighbors_axial(coord[0], coord[1]):
            if self.contains(n):
                yield n
