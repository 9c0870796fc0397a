# noise.py - hashed-lattice value-noise FBM for elevation/moisture fields
from __future__ import annotations
from typing import Sequence, Tuple
import numpy as np

from .hexgrid import HexCoord, hex_to_world

_MASK64 = 0xFFFFFFFFFFFFFFFF
_PRIME_X = np.uint64(0x9E3779B97F4A7C15)
_PRIME_Z = np.uint64(0xC2B2AE3D27D4EB4F)
_MIX1 = np.uint64(0xBF58476D1CE4E5B9)
_MIX2 = np.uint64(0x94D049BB133111EB)
_TWO53 = float(1 << 53)


def mix_seed(*args: int) -> int:
    """Deterministic 64-bit combination of integers (splitmix64 finaliser)."""
    x = 0x345678ABCDEF1234
    for a in args:
        a &= _MASK64
        a ^= a >> 33
        a = (a * 0xFF51AFD7ED558CCD) & _MASK64
        a ^= a >> 33
        x ^= a
        x = (x * 0xC4CEB9FE1A85EC53) & _MASK64
    return x


def _lattice(ix: np.ndarray, iz: np.ndarray, seed: int) -> np.ndarray:
    """Uniform [0,1) value for every integer lattice point (ix, iz)."""
    h = ix.astype(np.int64).astype(np.uint64) * _PRIME_X
    h ^= iz.astype(np.int64).astype(np.uint64) * _PRIME_Z
    h ^= np.uint64(mix_seed(seed))
    h ^= h >> np.uint64(30)
    h *= _MIX1
    h ^= h >> np.uint64(27)
    h *= _MIX2
    h ^= h >> np.uint64(31)
    return (h >> np.uint64(11)).astype(np.float64) / _TWO53


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def value_noise(x, z, seed: int) -> np.ndarray:
    """Single octave of coherent noise in [0,1] at points (x, z).

    Lattice values depend only on ``seed`` and the integer corners, so the
    result is a pure function of (seed, x, z) for any sampling region.
    """
    x, z = np.broadcast_arrays(np.asarray(x, dtype=np.float64),
                               np.asarray(z, dtype=np.float64))
    shape = x.shape
    # 0-d inputs would fall back to numpy scalars, which warn on wraparound
    x = np.atleast_1d(x)
    z = np.atleast_1d(z)
    x0 = np.floor(x)
    z0 = np.floor(z)
    xs = _fade(x - x0)
    zs = _fade(z - z0)
    ix = x0.astype(np.int64)
    iz = z0.astype(np.int64)
    g00 = _lattice(ix, iz, seed)
    g10 = _lattice(ix + 1, iz, seed)
    g01 = _lattice(ix, iz + 1, seed)
    g11 = _lattice(ix + 1, iz + 1, seed)
    gx0 = g00 * (1 - xs) + g10 * xs
    gx1 = g01 * (1 - xs) + g11 * xs
    return (gx0 * (1 - zs) + gx1 * zs).reshape(shape)


def fbm(x, z, seed: int, scale: float = 0.1, octaves: int = 4,
        persistence: float = 0.5, lacunarity: float = 2.0) -> np.ndarray:
    """Fractal sum of ``octaves`` value-noise layers, averaged back to [0,1]."""
    x = np.asarray(x, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    out = np.zeros(np.broadcast(x, z).shape, dtype=np.float64)
    amp = 1.0
    freq = float(scale)
    total = 0.0
    for octave in range(octaves):
        out += value_noise(x * freq, z * freq, mix_seed(seed, octave)) * amp
        total += amp
        amp *= persistence
        freq *= lacunarity
    if total > 0:
        out /= total
    return out


def normalize_field(values: np.ndarray) -> np.ndarray:
    """Min-max normalise to [0,1]; a flat field maps to zeros."""
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return values.copy()
    mn, mx = float(values.min()), float(values.max())
    span = max(mx - mn, 1e-12)
    return np.clip((values - mn) / span, 0.0, 1.0)


class FieldSynthesizer:
    """Elevation and moisture fields for one seed.

    The two fields use independent lattice seeds; they are sampled at each
    hex's world-space centre and normalised over the sampled region.
    """

    def __init__(self, elevation_seed: int, moisture_seed: int, *,
                 elevation_scale: float = 0.09, moisture_scale: float = 0.11,
                 octaves: int = 4, persistence: float = 0.5,
                 lacunarity: float = 2.0) -> None:
        self.elevation_seed = int(elevation_seed)
        self.moisture_seed = int(moisture_seed)
        self.elevation_scale = elevation_scale
        self.moisture_scale = moisture_scale
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity

    def raw(self, x, z) -> Tuple[np.ndarray, np.ndarray]:
        """Un-normalised fields at world points."""
        elev = fbm(x, z, self.elevation_seed, self.elevation_scale,
                   self.octaves, self.persistence, self.lacunarity)
        moist = fbm(x, z, self.moisture_seed, self.moisture_scale,
                    self.octaves, self.persistence, self.lacunarity)
        return elev, moist

    def sample(self, coords: Sequence[HexCoord]) -> Tuple[np.ndarray, np.ndarray]:
        """Normalised ``(elevation, moisture)`` arrays aligned with ``coords``.

        Fields are sampled on the unit-size layout so the noise scale does
        not depend on the render hex size.
        """
        if not coords:
            empty = np.zeros(0, dtype=np.float64)
            return empty, empty.copy()
        pts = np.array([hex_to_world(c, 1.0) for c in coords], dtype=np.float64)
        elev, moist = self.raw(pts[:, 0], pts[:, 1])
        return normalize_field(elev), normalize_field(moist)
