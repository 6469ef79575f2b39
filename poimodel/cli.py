import argparse
import logging
import sys
from typing import Optional, Sequence

from . import config
from .errors import PoiModelError
from .model import Model, merge_models

LOGGER = logging.getLogger("poimodel.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="poimodel",
        description="Inspect and merge .poi archives",
    )
    ap.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        help=f"Logging level, one of {', '.join(config.LOG_LEVELS)}.",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser("inspect", help="Load an archive and report what it holds")
    inspect.add_argument("archive", help="Path to a .poi archive")
    inspect.add_argument(
        "--strict",
        action="store_true",
        help="Exit with 1 if a POI has an unknown type or an invalid coordinate",
    )

    merge = sub.add_parser("merge", help="Merge several archives into one")
    merge.add_argument("archives", nargs="+", help="Paths to .poi archives, merged left to right")
    merge.add_argument(
        "--out",
        required=True,
        help=f"Output path (its extension is replaced by .{config.ARCHIVE_EXTENSION})",
    )
    return ap


def run_inspect(archive: str, strict: bool = False) -> int:
    model = Model.try_from_path(archive)
    n_props = sum(len(poi.properties) for poi in model.pois.values())
    LOGGER.info(
        "%s: %s POIs, %s POI types, %s properties",
        archive, len(model.pois), len(model.poi_types), n_props,
    )

    dangling = model.dangling_poi_type_ids()
    invalid = model.invalid_coord_ids()
    if dangling:
        LOGGER.warning("%s POIs reference an unknown POI type, e.g. %s", len(dangling), dangling[:5])
    if invalid:
        LOGGER.warning("%s POIs have an unset or out-of-range coordinate, e.g. %s", len(invalid), invalid[:5])

    if strict and (dangling or invalid):
        return 1
    return 0


def run_merge(archives: Sequence[str], out: str) -> int:
    merged = merge_models(Model.try_from_path(path) for path in archives)
    written = merged.save_to_path(out)
    LOGGER.info("Merged %s archives into %s", len(archives), written)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = str(args.log_level).upper()
    if level not in config.LOG_LEVELS:
        parser.error(f"unknown log level {args.log_level!r}, expected one of {config.LOG_LEVELS}")
    logging.basicConfig(level=getattr(logging, level))

    try:
        if args.command == "inspect":
            return run_inspect(args.archive, args.strict)
        return run_merge(args.archives, args.out)
    except KeyboardInterrupt:
        LOGGER.error("Interrupted.")
        return 130  # 128 + SIGINT
    except (PoiModelError, OSError) as e:
        LOGGER.error("Fatal error: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
