"""Command-line interface for the smtplike example server."""

import argparse
import logging
import signal
import sys
from dataclasses import replace

from .config import Config, load_config
from .example import ExampleContext, build_example_table
from .transport import TcpListener
from .server import ProtocolServer


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="smtplike example server - a small SMTP-like conversation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Listen on 0.0.0.0:1234
  %(prog)s -c config.yaml           # Use specific config file
  %(prog)s --host 127.0.0.1 -p 2525 # Listen on a specific address
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "--host",
        metavar="HOST",
        help="Address to listen on",
    )

    parser.add_argument(
        "-p", "--port",
        metavar="PORT",
        type=int,
        help="TCP port to listen on",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    # Load configuration
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            logger.error(f"Config file not found: {args.config}")
            return 1
    else:
        config = Config()

    # Override config with command line arguments
    if args.host:
        config = replace(config, host=args.host)
    if args.port is not None:
        config = replace(config, port=args.port)

    try:
        listener = TcpListener(config.host, config.port, config.backlog)
        server = ProtocolServer(
            build_example_table(), listener, ExampleContext, config
        )
    except Exception as e:
        logger.error(f"Failed to initialize server: {e}")
        return 1

    def signal_handler(sig, frame):
        logger.info("Shutdown signal received")
        server.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting example server...")
    logger.info(f"  Address: {config.host}:{config.port}")
    logger.info(f"  Encoding: {config.encoding}")

    try:
        server.start()
        logger.info("Server running. Press Ctrl+C to stop.")

        # Keep running
        signal.pause()

    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1
    finally:
        server.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
