"""
CLI entry point for NameSilo DDNS.

This module provides the command-line interface for running one update.
"""

from __future__ import annotations

import sys

import httpx

from namesilo_ddns.config import build_parser, load_config
from namesilo_ddns.errors import ConfigError
from namesilo_ddns.logging_config import setup_logging
from namesilo_ddns.namesilo import HTTP_TIMEOUT, NameSiloClient
from namesilo_ddns.updater import DDNSUpdater


def main(argv: list[str] | None = None) -> int:
    """
    Run a NameSilo DDNS update.

    Parse command-line arguments, load configuration, and run the update.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    int
        Process exit code: 0 on success, 1 on any error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args)
    except ConfigError as e:
        parser.print_usage(sys.stderr)
        print(e, file=sys.stderr)  # noqa: T201
        return 1

    try:
        logger = setup_logging(debug=config.debug, log_file=config.log_file)
    except ConfigError as e:
        print(e, file=sys.stderr)  # noqa: T201
        return 1

    # Redirects from the echo service or the API are followed, not treated as errors
    with httpx.Client(timeout=HTTP_TIMEOUT, follow_redirects=True) as client:
        api = NameSiloClient(client, config.key)
        result = DDNSUpdater(config, client, api, logger).run()

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
