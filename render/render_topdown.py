# render_topdown.py - simple top-down (2D) hex fill of a generated map
from __future__ import annotations
from typing import Dict, List, Mapping, Tuple
import math
from PIL import Image, ImageDraw
from hexmap.biomes import Biome
from hexmap.hexgrid import hex_to_world

COLORS: Dict[Biome, Tuple[int, int, int]] = {
    Biome.DESERT: (int(0.93*255), int(0.80*255), int(0.55*255)),
    Biome.GRASSLAND: (int(0.45*255), int(0.68*255), int(0.30*255)),
    Biome.BADLANDS: (int(0.62*255), int(0.40*255), int(0.30*255)),
    Biome.RIVERSIDE: (int(0.35*255), int(0.62*255), int(0.55*255)),
}
RIVER_COLOR = (40, 90, 200)
PATH_COLOR = (120, 85, 50)
SITE_COLOR = (240, 240, 240)
BUILDING_COLOR = (30, 30, 30)
BACKGROUND = (16, 18, 24, 255)


def hex_points_pointy(cx: float, cz: float, radius: float) -> List[Tuple[float, float]]:
    pts = []
    for i in range(6):
        ang = math.radians(60*i - 30)
        x = cx + math.cos(ang) * radius
        z = cz + math.sin(ang) * radius
        pts.append((x, z))
    return pts


def render_topdown(tiles: Mapping, radius: float = 8.0, scale: int = 1) -> Image.Image:
    """Draw biomes, then rivers, paths and buildings on top."""
    if not tiles:
        raise ValueError("nothing to render: tile map is empty")
    centers = {key: hex_to_world(t.coord, radius) for key, t in tiles.items()}
    xs = [c[0] for c in centers.values()]
    zs = [c[1] for c in centers.values()]
    padding = radius * 2
    min_x, min_z = min(xs) - padding, min(zs) - padding
    img_w = int(max(xs) - min_x + padding)
    img_h = int(max(zs) - min_z + padding)

    img = Image.new("RGBA", (img_w, img_h), BACKGROUND)
    draw = ImageDraw.Draw(img)

    for key, t in tiles.items():
        cx, cz = centers[key]
        x, y = cx - min_x, cz - min_z
        draw.polygon(hex_points_pointy(x, y, radius), fill=COLORS[t.biome])
        if t.river_tile:
            draw.polygon(hex_points_pointy(x, y, radius * 0.55), fill=RIVER_COLOR)
        if t.path_tile:
            d = radius * 0.3
            draw.ellipse((x - d, y - d, x + d, y + d), fill=PATH_COLOR)
        if t.building_site:
            d = radius * 0.45
            fill = BUILDING_COLOR if t.building is not None else None
            draw.rectangle((x - d, y - d, x + d, y + d), outline=SITE_COLOR, fill=fill)

    if scale > 1:
        img = img.resize((img_w*scale, img_h*scale), Image.NEAREST)
    return img
