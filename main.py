# ------------------------------------------------------------------------------
# Main Script for Resolving Image Derivatives from the Command Line
# main.py
# ------------------------------------------------------------------------------
import argparse
import json
import sys

from config import get_config
from logging_config import get_logger
from core import resolve_core, settings_core
from resolver.errors import SourceNotFoundError

logger = get_logger(__name__)


def _parse_rgb(value):
    try:
        parts = [int(part) for part in value.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected r,g,b, got {value!r}")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected r,g,b, got {value!r}")
    return tuple(parts)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Resolve image derivative sources and cache paths"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    resolve = commands.add_parser("resolve", help="Resolve source and cache path")
    resolve.add_argument("path", help="Source path below the media base directory")
    resolve.add_argument("--destination", "-d", default="image", help="Destination subdir (default: image)")
    resolve.add_argument("--width", type=int, default=None)
    resolve.add_argument("--height", type=int, default=None)
    resolve.add_argument("--quality", type=int, default=90)
    resolve.add_argument("--angle", type=int, default=0)
    resolve.add_argument("--background", type=_parse_rgb, default=(255, 255, 255), help="r,g,b (default: 255,255,255)")
    resolve.add_argument("--no-aspect-ratio", action="store_true")
    resolve.add_argument("--no-frame", action="store_true")
    resolve.add_argument("--no-transparency", action="store_true")
    resolve.add_argument("--constrain-only", action="store_true")
    resolve.add_argument("--watermark", default=None, help="Watermark file reference")
    resolve.add_argument("--watermark-opacity", type=int, default=0)
    resolve.add_argument("--watermark-position", default="")
    resolve.add_argument("--watermark-width", type=int, default=None)
    resolve.add_argument("--watermark-height", type=int, default=None)

    estimate = commands.add_parser("estimate", help="Estimate decode memory of an image")
    estimate.add_argument("path", help="Absolute image path")

    clear = commands.add_parser("clear-cache", help="Remove cached derivatives")
    clear.add_argument("--store", default=None, help="Only this store scope")
    clear.add_argument("--dry-run", "-n", action="store_true", help="Only count files")

    setting = commands.add_parser("set-setting", help="Store a store-scoped setting")
    setting.add_argument("key", help="Slash-separated key, e.g. catalog/placeholder/image_placeholder")
    setting.add_argument("value", help="Setting value")
    setting.add_argument("--store", default=None, help="Store scope (default: the default scope)")

    return parser


def transform_from_args(args):
    params = {
        "keep_aspect_ratio": not args.no_aspect_ratio,
        "keep_frame": not args.no_frame,
        "keep_transparency": not args.no_transparency,
        "constrain_only": args.constrain_only,
        "background_color": args.background,
        "angle": args.angle,
        "quality": args.quality,
        "width": args.width,
        "height": args.height,
    }
    if args.watermark:
        params["watermark"] = {
            "file": args.watermark,
            "opacity": args.watermark_opacity,
            "position": args.watermark_position,
            "width": args.watermark_width,
            "height": args.watermark_height,
        }
    return resolve_core.build_transform(params)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger.debug(f"Configuration: {json.dumps(get_config(), indent=2)}")

    if args.command == "resolve":
        try:
            transform = transform_from_args(args)
        except ValueError as e:
            logger.error(f"Invalid transform: {e}")
            return 2
        try:
            resolved = resolve_core.resolve_source(args.path, transform, args.destination)
        except SourceNotFoundError as e:
            logger.error(f"{e} ({e.path})")
            return 1
        print(json.dumps(resolve_core.resolved_to_dict(resolved), indent=2))
        return 0

    if args.command == "estimate":
        print(json.dumps({"path": args.path, "bytes": resolve_core.estimate_decode_cost(args.path)}))
        return 0

    if args.command == "clear-cache":
        stats = resolve_core.clear_cache(store_id=args.store, dry_run=args.dry_run)
        print(json.dumps(stats, indent=2))
        return 0

    if args.command == "set-setting":
        settings_core.set_store_setting(args.key, args.value, store_id=args.store)
        resolve_core.reset_resolver_manager()
        print(json.dumps({"key": args.key, "value": args.value, "store": args.store or "default"}))
        return 0

    return 2


if __name__ == '__main__':
    sys.exit(main())
