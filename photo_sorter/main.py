import argparse
import logging
import sys
from pathlib import Path

from . import config
from .core import PhotoSorterApp
from .exceptions import FileOperationError


def setup_logging(verbose: bool):
    """Console-only logging; the sorter never writes files of its own."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def default_input_dir() -> Path:
    """The directory holding the running script, like a dropped-in binary."""
    return Path(sys.argv[0]).resolve().parent


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Photo Sorter: file photos into YYYY/YYYY-MM-DD/<camera> folders")

    p.add_argument("-in", "--in", dest="input_dir", type=Path, default=None,
                   help="Input directory (default: directory of the executable)")
    p.add_argument("-out", "--out", dest="output_dir", type=Path, default=None,
                   help=f"Output root (default: <in>/{config.DEFAULT_OUTPUT_DIRNAME})")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = p.parse_args(argv)

    if args.input_dir is None:
        args.input_dir = default_input_dir()
    if args.output_dir is None:
        args.output_dir = args.input_dir / config.DEFAULT_OUTPUT_DIRNAME

    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    logging.info(f"Input path:  {args.input_dir}")
    logging.info(f"Output path: {args.output_dir}")

    app = PhotoSorterApp()

    try:
        app.organize(args.input_dir, args.output_dir)
    except FileOperationError as e:
        logging.error(f"{e}. Stopping.")
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error during sorting.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
