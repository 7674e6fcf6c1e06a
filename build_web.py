#!/usr/bin/env python3
"""
Inject the runtime config into the built frontend's index.html.

Run at deploy/build time, after the frontend build has produced
front/index.html.  Loads .env (or .env.test when NODE_ENV=test), builds
the config from SERVER_URL and rewrites the Twenty Config block.

A missing build is not an error: the frontend is then assumed to be
served independently and the script exits 0 unless --strict is given.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from front_config.env import FrontConfigError, RuntimeConfig, load_env_file
from front_config.injector import DEFAULT_METADATA_MARKER, generate_front_config

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_SKIPPED = 2


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inject runtime config into the built frontend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use SERVER_URL from .env
  python build_web.py

  # Explicit target and URL
  python build_web.py \\
    --index-path ./front/index.html \\
    --server-url "https://crm.example.com"
        """
    )
    parser.add_argument(
        "--index-path",
        type=Path,
        help="Path to the built index.html (default: <project>/front/index.html)"
    )
    parser.add_argument(
        "--env-dir",
        type=Path,
        help="Directory holding .env / .env.test (default: current directory)"
    )
    parser.add_argument(
        "--node-env",
        help="Override NODE_ENV when choosing the env file"
    )
    parser.add_argument(
        "--server-url",
        help="Server base URL (overrides SERVER_URL)"
    )
    parser.add_argument(
        "--metadata-marker",
        default=DEFAULT_METADATA_MARKER,
        help=f"Text expected to survive in index.html (default: {DEFAULT_METADATA_MARKER!r})"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with code {EXIT_SKIPPED} when the build is missing or not writable"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        env_path = load_env_file(node_env=args.node_env, base_dir=args.env_dir)
    except FrontConfigError as e:
        logger.error(str(e))
        return EXIT_ERROR

    if env_path:
        logger.debug(f"Loaded environment from {env_path}")

    config = RuntimeConfig.from_env()
    if args.server_url:
        config = RuntimeConfig(server_base_url=args.server_url)

    result = generate_front_config(
        config,
        index_path=args.index_path,
        metadata_marker=args.metadata_marker or None,
    )

    if result.skipped:
        return EXIT_SKIPPED if args.strict else EXIT_SUCCESS

    if result.region_found:
        logger.info(
            f"Injected REACT_APP_SERVER_BASE_URL={config.server_base_url!r} "
            f"into {result.index_path}"
        )
    else:
        logger.info(f"No Twenty Config block in {result.index_path}, left unchanged")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
