"""Command-line interface for the mesh pager server."""

import argparse
import asyncio
import logging
import signal
import sys
from dataclasses import replace

from .config import ServerConfig, configure, load_config
from .errors import ValidationError
from .server import PagerServer, load_pages
from .transport import MeshtasticTransport


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
        description="Chat Paginator - Page a document to mesh nodes with navigation controls",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -f notes.txt                       # Page notes.txt, auto-detect serial radio
  %(prog)s -c config.yaml                     # Use specific config file
  %(prog)s -f notes.txt --timeout 600         # Sessions expire after 10 minutes
  %(prog)s -f notes.txt --after-timeout delete
  %(prog)s -f notes.txt --serial /dev/ttyUSB0 # Use specific serial port
  %(prog)s -f notes.txt --ble AA:BB:CC:DD:EE:FF
  %(prog)s -f notes.txt --tcp 192.168.1.100
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-f", "--file",
        metavar="FILE",
        help="Text file to page through",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=float,
        help="Seconds until a pagination expires (0 disables expiry)",
    )

    parser.add_argument(
        "--after-timeout",
        choices=["delete", "disable"],
        help="What happens to the message when a pagination expires",
    )

    # Connection options (mutually exclusive)
    conn_group = parser.add_mutually_exclusive_group()
    conn_group.add_argument(
        "--serial",
        metavar="PORT",
        nargs="?",
        const="auto",
        help="Use serial connection (default: auto-detect)",
    )
    conn_group.add_argument(
        "--ble",
        metavar="ADDRESS",
        help="Use Bluetooth LE connection",
    )
    conn_group.add_argument(
        "--tcp",
        metavar="HOST",
        help="Use TCP connection",
    )

    return parser.parse_args()


def apply_args(config: ServerConfig, args: argparse.Namespace) -> ServerConfig:
    """
    Override config with command line arguments.

    Raises:
        ValidationError: If an override is invalid.
    """
    if args.file:
        config = replace(config, pages_file=args.file)

    overrides = {}
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.after_timeout:
        overrides["after_timeout"] = args.after_timeout
    if overrides:
        config = replace(config, paginator=configure(config.paginator, **overrides))

    if args.serial is not None:
        device = None if args.serial == "auto" else args.serial
        config = replace(config, connection_type="serial", device=device)
    elif args.ble:
        config = replace(config, connection_type="ble", device=args.ble)
    elif args.tcp:
        config = replace(config, connection_type="tcp", device=args.tcp)

    return config


async def run_server(server: PagerServer) -> None:
    """Run the server until SIGINT or SIGTERM."""
    logger = logging.getLogger(__name__)
    loop = asyncio.get_running_loop()
    shutdown = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)

    server.start()
    logger.info("Server running. Press Ctrl+C to stop.")
    try:
        await shutdown.wait()
        logger.info("Shutdown signal received")
    finally:
        await server.stop()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else ServerConfig()
        config = apply_args(config, args)
    except FileNotFoundError:
        logger.error(f"Config file not found: {args.config}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    pages_path = config.get_pages_path()
    if pages_path is None:
        logger.error("No pages file given; use -f or set server.pages_file in the config")
        return 1

    try:
        pages = load_pages(pages_path, config.max_message_size)
    except FileNotFoundError:
        logger.error(f"Pages file does not exist: {pages_path}")
        return 1

    if not pages:
        logger.error(f"{config.paginator.messages.no_data} ({pages_path} is empty)")
        return 1

    # Create components
    try:
        transport = MeshtasticTransport(
            connection_type=config.connection_type,
            device=config.device,
            max_message_size=config.max_message_size,
            ack_timeout=config.ack_timeout_seconds,
            messages=config.paginator.messages,
        )
        server = PagerServer(pages, transport, config)
    except Exception as e:
        logger.error(f"Failed to initialize server: {e}")
        return 1

    logger.info(f"  Pages file: {pages_path} ({len(pages)} pages)")
    logger.info(f"  Connection: {config.connection_type}" + (f" ({config.device})" if config.device else ""))
    logger.info(f"  Max message size: {config.max_message_size}")
    logger.info(f"  Session timeout: {config.paginator.timeout:g}s, after timeout: {config.paginator.after_timeout.value}")

    try:
        asyncio.run(run_server(server))
    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
