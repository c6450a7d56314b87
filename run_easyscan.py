#!/usr/bin/env python3
"""
Command-line driver for easyscan declaration extraction.

Extracts the struct and list declarations selected by easyscan directive
comments from a Go file or package directory and writes them, together with
the generator settings, as a JSON manifest for the scanner code generator.

Usage:
    python run_easyscan.py models.go
    python run_easyscan.py --all --snake_case ./internal/store
    python run_easyscan.py --any_order --output_filename out/scan.json models.go
"""

import argparse
import logging
import sys
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from scancore.startup_config import GeneratorSettings

logger = logging.getLogger(__name__)

_CASE_FLAGS = ("lower", "camel", "kebab", "snake", "pascal")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="easyscan: extract Go scan targets for code generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_easyscan.py models.go\n"
            "  python run_easyscan.py --all --snake_case ./internal/store\n"
        )
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Go source files or package directories to process."
    )
    parser.add_argument(
        "--output_filename", "--output-filename",
        dest="output_filename",
        default=None,
        help="Write the manifest to this path instead of <name>_easyscan.json."
    )
    parser.add_argument(
        "--all",
        dest="all_types",
        action="store_true",
        default=None,
        help="Generate scanners for all types, not only easyscan:explicit ones."
    )
    parser.add_argument(
        "--any_order", "--any-order",
        dest="any_order",
        action="store_true",
        default=None,
        help="Allow scanning fields in any column order."
    )
    case_group = parser.add_mutually_exclusive_group()
    for style in _CASE_FLAGS:
        case_group.add_argument(
            f"--{style}_case",
            dest="default_case",
            action="store_const",
            const=style,
            help=f"Use {style} case column names by default."
        )
    parser.set_defaults(default_case=None)
    parser.add_argument(
        "--config",
        default=None,
        help="YAML settings file. Default: $EASYSCAN_CONFIG or .easyscan.yml"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable debug logging."
    )

    return parser.parse_args(argv)


def generate(path: str, settings: "GeneratorSettings", run_id: str) -> str:
    """Extract one input and write its manifest.

    Args:
        path: Go file or package directory.
        settings: Resolved GeneratorSettings.
        run_id: Correlation ID recorded in the manifest.

    Returns:
        Path of the written manifest.
    """
    from declextract.extractor import parse_path
    from scancore.run_artifacts import build_manifest, resolve_output_path, write_manifest
    from scancore.structured_logging import phase_scope

    with phase_scope("extract", path):
        result = parse_path(path, all_types=settings.all_types)
        logger.info(
            "Package %s: %d structs, %d lists",
            result.package_name,
            len(result.records),
            len(result.lists),
        )

    with phase_scope("write", path):
        out_path = resolve_output_path(path, result.package_name, settings.output_filename)
        write_manifest(build_manifest(result, settings, run_id), out_path)
        logger.info("Wrote %s", out_path)

    return out_path


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the easyscan driver."""
    from declextract.parser import ExtractionError
    from scancore.startup_config import ConfigValidationError, load_generator_settings
    from scancore.structured_logging import configure_structured_logging, set_run_id

    args = parse_args(argv)
    configure_structured_logging(verbose=args.verbose)
    run_id = set_run_id()

    try:
        settings = load_generator_settings(
            config_path=args.config,
            overrides={
                "all_types": args.all_types,
                "any_order": args.any_order,
                "default_case": args.default_case,
                "output_filename": args.output_filename,
            },
        )
        for path in args.paths:
            generate(path, settings, run_id)

    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1
    except ConfigValidationError as e:
        logger.error(f"Invalid settings: {e}")
        return 1
    except (ExtractionError, ValueError) as e:
        logger.error(f"Error parsing input: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    except Exception as e:
        logger.error(f"easyscan failed: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
