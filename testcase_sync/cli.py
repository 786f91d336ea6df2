"""
Command-line entry point for the test-case sync.

Usage::

    python -m testcase_sync
    TESTCASE_JSON=path/to/cases.json sync-testcases --verbose

Exit codes:

- ``0``: every definition was created or skipped
- ``1``: at least one definition failed, or setup failed (config, Key
  Vault, unreadable test-case file)
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from testcase_sync.config import load_config
from testcase_sync.exceptions import (
    ConfigurationError,
    SecretRetrievalError,
    SourceFileError,
)
from testcase_sync.keyvault import resolve_credentials
from testcase_sync.sync import (
    default_test_case_path,
    format_summary,
    load_test_cases,
    sync_test_cases,
)

logger = logging.getLogger("testcase_sync")

EXIT_FAILURE = 1

FATAL_GUIDANCE = (
    "Please ensure:",
    "1. You are logged in with Azure CLI: az login",
    "2. You have access to the Key Vault",
    "3. All required secrets exist in Key Vault",
    "4. config.json has the correct Key Vault URL",
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the sync script."""
    parser = argparse.ArgumentParser(
        prog="sync-testcases",
        description="Create Azure DevOps Test Case work items from a local JSON file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.json (default: nearest config.json above the cwd)",
    )
    parser.add_argument(
        "--testcases",
        type=Path,
        default=None,
        help="Path to the test-case JSON file (default: $TESTCASE_JSON or the bundled file)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _print_fatal(exc: Exception) -> None:
    print("", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print("FATAL ERROR", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(str(exc), file=sys.stderr)
    print("", file=sys.stderr)
    for line in FATAL_GUIDANCE:
        print(line, file=sys.stderr)
    print("=" * 60, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the sync end to end.

    Returns:
        0 when no definition failed, otherwise ``EXIT_FAILURE``.
    """
    args = parse_args(argv)
    configure_logging(args.verbose)

    print("Azure DevOps Test Case Creator")
    print("Using Key Vault for secure authentication")
    print("=" * 60)

    try:
        config = load_config(args.config)
        credentials = resolve_credentials(config)

        testcase_path = args.testcases or default_test_case_path()
        logger.info("Loading test cases from: %s", testcase_path)
        definitions = load_test_cases(testcase_path)
        logger.info("Loaded %d test cases", len(definitions))
    except (ConfigurationError, SecretRetrievalError, SourceFileError) as exc:
        logger.debug("Setup failed", exc_info=True)
        _print_fatal(exc)
        return EXIT_FAILURE

    summary = sync_test_cases(definitions, config=config, credentials=credentials)
    print(format_summary(summary))
    return summary.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
