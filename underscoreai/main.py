"""
underscoreai entrypoint.

Usage: _ <describe the command you want...>

Prints the suggested shell command to stdout.
"""

import argparse
import logging
import sys

from . import __version__
from .errors import UnderscoreAIError

logger = logging.getLogger(__name__)

DESCRIPTION = "A command-line tool to help shell users describe their command and get it via AI"

# Only these are options; every other argument is part of the description
OPTIONS = ("-h", "--help", "--version")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="_", description=DESCRIPTION)
    parser.add_argument("words", nargs="*", help="what the command should do, in plain words")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="underscoreai: %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(words, parser: argparse.ArgumentParser) -> int:
    # Import here to keep --help and --version fast
    from . import config_file
    from .agent import suggest_command
    from .llm.config import env_overrides

    path = config_file.config_path()
    if config_file.ensure_default_config(path):
        print(f"underscoreai: created default config at {path}", file=sys.stderr)

    cfg = config_file.apply_overrides(config_file.load_config(path), env_overrides())
    _setup_logging(cfg.debug)

    if not " ".join(words).strip():
        parser.print_help()
        return 0

    config_file.validate_config(cfg, path)
    print(suggest_command(cfg, " ".join(words)))
    return 0


def main(argv=None) -> int:
    """Parse arguments, print a suggested command, return the exit status."""
    parser = build_parser()
    words = sys.argv[1:] if argv is None else list(argv)
    if words and words[0] in OPTIONS:
        parser.parse_args(words[:1])

    try:
        return run(words, parser)
    except UnderscoreAIError as e:
        logger.debug("Failed", exc_info=True)
        print(f"underscoreai: {e.kind} error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
