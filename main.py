#!/usr/bin/env python3
"""DMX Controller - Main entry point."""

import argparse
import logging
from dataclasses import replace

from config_manager import ConfigManager
from controller import DmxController

logger = logging.getLogger(__name__)


def build_controller(config_manager: ConfigManager, test: bool = False) -> DmxController:
    """Create the controller and its fixtures from configuration."""
    config = config_manager.config
    controller_config = config.controller
    if test:
        # The loaded config keeps the value from the file
        controller_config = replace(controller_config, test=True)
    return DmxController.from_config(controller_config, config.fixtures)


def print_banner(controller: DmxController, host: str, port: int) -> None:
    print("=" * 50)
    print("DMX Controller")
    print("=" * 50)
    print(f"Universe: {controller.universe}")
    print(f"Output: {'in memory (test mode)' if controller.test else controller.cmd}")
    print(f"FPS: {controller.fps}")
    print(f"Web API: http://{host}:{port}/api")
    print("=" * 50)
    print("\nFixtures:")
    for fixture in controller.fixtures:
        print(f"  {fixture.start_address:>3}-{fixture.end_address:<3} {fixture.label} [{fixture.name}]")
    print("\nCommands:")
    print(f"  Capabilities: {', '.join(controller.capabilities) or '-'}")
    print(f"  Points: {', '.join(controller.points) or '-'}")
    print("=" * 50)


def main() -> None:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(description="Drive a DMX universe through a streaming client.")
    parser.add_argument("--config", default="config.json", help="Path to the JSON configuration")
    parser.add_argument("--host", help="Web API host (overrides config)")
    parser.add_argument("--port", type=int, help="Web API port (overrides config)")
    parser.add_argument(
        "--test",
        action="store_true",
        help="Do not launch the streaming client or sleep between frames",
    )
    args = parser.parse_args()

    import uvicorn
    from web import create_app

    config_manager = ConfigManager(args.config)
    host = args.host or config_manager.config.web_host
    port = args.port or config_manager.config.web_port

    with build_controller(config_manager, test=args.test) as controller:
        print_banner(controller, host, port)
        app = create_app(controller, config_manager)
        uvicorn.run(app, host=host, port=port, log_level="warning")
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
