#!/usr/bin/env python3
"""Remote Log Server — lets a monitoring client poll server log files over HTTP."""

import argparse
import logging
import sys

from log_server.app import create_app, run_server
from log_server.config import LOG_LEVELS, load_config, load_yaml_config
from log_server.reader import IncrementalLogReader
from log_server.sweeper import start_sweeper

logger = logging.getLogger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="log-server",
        description="Serve newly appended log file content to polling clients",
    )
    parser.add_argument("-H", "--host", default=None, help="Address to bind (default: 0.0.0.0)")
    parser.add_argument("-p", "--port", type=int, default=None, help="Port to bind (default: 1625)")
    parser.add_argument(
        "-v", "--verbose", dest="verbose", action="store_const", const=True, default=None,
        help="Log rejected requests (default)",
    )
    parser.add_argument(
        "-q", "--quiet", dest="verbose", action="store_const", const=False,
        help="Do not log rejected requests",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None, help="Logging level (default: INFO)")
    parser.add_argument(
        "--ttl", dest="state_ttl_seconds", type=float, default=None,
        help="Seconds a continuation token stays valid (default: 30)",
    )
    parser.add_argument(
        "--sweep-interval", dest="sweep_interval_seconds", type=float, default=None,
        help="Seconds between background sweeps of expired tokens, 0 to disable (default: 10)",
    )
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    return parser


def main(argv=None):
    args = build_cli_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args, load_yaml_config(args.config))
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2
    logging.getLogger().setLevel(config.log_level)
    logger.info("Config: host=%s port=%d ttl=%.1fs sweep=%.1fs verbose=%s",
                config.host, config.port, config.state_ttl_seconds,
                config.sweep_interval_seconds, config.verbose)

    reader = IncrementalLogReader(ttl_seconds=config.state_ttl_seconds, verbose=config.verbose)
    app = create_app(config, reader)
    scheduler = start_sweeper(reader, config.sweep_interval_seconds)

    try:
        run_server(app, config.host, config.port)
    except KeyboardInterrupt:
        pass
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        logger.info("Log server stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
