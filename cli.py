import argparse
import json
import logging
import sys

from hexmap import ConfigurationError, HexMapConfig, HexMapGenerator, summarize
from render import render_topdown


def config_from_args(args) -> HexMapConfig:
    return HexMapConfig.from_mapping({
        "seed": args.seed,
        "width": args.width,
        "height": args.height,
        "river_count": args.rivers,
    })


def cmd_generate(args):
    gen = HexMapGenerator(config_from_args(args))
    tiles = gen.generate()
    if args.json:
        json.dump({key: t.to_dict() for key, t in tiles.items()}, sys.stdout)
        sys.stdout.write("\n")
    else:
        print(summarize(tiles))


def cmd_summary(args):
    tiles = HexMapGenerator(config_from_args(args)).generate()
    s = summarize(tiles)
    print(f"{s['tiles']} tiles")
    for name, count in s["biomes"].items():
        print(f"  {name:<10} {count}")
    print(f"rivers {s['river_tiles']}  paths {s['path_tiles']}  "
          f"sites {s['building_sites']}  buildings {s['buildings']}")


def cmd_render(args):
    tiles = HexMapGenerator(config_from_args(args)).generate()
    img = render_topdown(tiles, radius=args.hex_size, scale=args.scale)
    img.save(args.out)
    print(f"Saved {args.out}")


def _add_map_args(p):
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--width", type=int, default=32)
    p.add_argument("--height", type=int, default=32)
    p.add_argument("--rivers", type=int, default=3, help="Rivers to attempt")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Procedural hex map generator")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers()

    ap_gen = sub.add_parser("generate", help="Generate a map and print it")
    _add_map_args(ap_gen)
    ap_gen.add_argument("--json", action="store_true", help="Print tiles as JSON")
    ap_gen.set_defaults(func=cmd_generate)

    ap_sum = sub.add_parser("summary", help="Print biome and feature counts")
    _add_map_args(ap_sum)
    ap_sum.set_defaults(func=cmd_summary)

    ap_ren = sub.add_parser("render", help="Render a map to a PNG preview")
    _add_map_args(ap_ren)
    ap_ren.add_argument("--out", required=True, help="PNG path")
    ap_ren.add_argument("--hex-size", type=float, default=8.0, help="Hex radius in px")
    ap_ren.add_argument("--scale", type=int, default=1)
    ap_ren.set_defaults(func=cmd_render)

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        ap.print_help()
        return 0
    try:
        args.func(args)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
