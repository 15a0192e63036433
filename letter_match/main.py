"""Entry point for the letter match board."""

import argparse
import dataclasses
import logging
import os
import sys

# ensure repo root on path for local runs
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from letter_match.config import ConfigError, load_config  # noqa: E402
from letter_match.ui.app import LetterMatchApp, bootstrap_window  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Letter match board")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LETTER_MATCH_LOG_LEVEL", "INFO"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to LETTER_MATCH_LOG_LEVEL "
            "environment variable or INFO."
        ),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("LETTER_MATCH_LOG_PATH"),
        help=(
            "Optional log file path. Defaults to letter_match_log.txt next to the "
            "executable."
        ),
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings.ini. Defaults to LETTER_MATCH_CONFIG or settings.ini next to the executable.",
    )
    parser.add_argument(
        "--letters",
        type=int,
        default=None,
        help="Number of letters per round (overrides settings.ini).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the letter draw, for reproducible rounds.",
    )
    return parser.parse_args(argv)


def configure_logging(log_level_name: str, log_path: str | None) -> str:
    resolved_level_name = log_level_name.upper()
    log_level = getattr(logging, resolved_level_name, logging.INFO)

    if not log_path:
        base_dir = os.path.dirname(sys.argv[0])
        log_path = os.path.join(base_dir, "letter_match_log.txt")

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )

    return log_path


def main() -> None:
    args = parse_args()
    log_level_name = "DEBUG" if args.debug else args.log_level
    log_path = configure_logging(log_level_name, args.log_file)
    logger.info("Starting letter match (log level %s, log file %s)", log_level_name.upper(), log_path)

    try:
        config = load_config(args.config)
        if args.letters is not None:
            if not 1 <= args.letters <= len(config.alphabet):
                raise ConfigError(
                    f"--letters must be between 1 and {len(config.alphabet)}, got {args.letters}"
                )
            config = dataclasses.replace(config, letters_count=args.letters)
    except ConfigError:
        logger.exception("Invalid configuration")
        sys.exit(2)

    app = LetterMatchApp(sys.argv)
    window = bootstrap_window(config, seed=args.seed)
    app.window = window
    window.show()

    def cleanup() -> None:
        try:
            if window:
                window.close()
        except Exception:  # pragma: no cover - best effort
            logger.exception("Unexpected error while closing window")

    app.aboutToQuit.connect(cleanup)
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
