"""
Main entry point for the magic calculator.

Launches the pygame simulator or the console shell depending on
MAGICALC_ENV.
"""

import asyncio
import logging
import sys

from magicalc.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the pygame simulator."""
    from magicalc.core.state import TrickStateMachine
    from magicalc.simulator.window import SimulatorWindow, WindowConfig

    window = SimulatorWindow(
        config=WindowConfig.from_settings(settings.simulator),
        machine=TrickStateMachine(settings.trick),
    )

    await window.run()


def run_console(settings: Settings) -> None:
    """Run the line-oriented console shell."""
    from magicalc.core.state import TrickStateMachine
    from magicalc.simulator.console import ConsoleShell

    shell = ConsoleShell(machine=TrickStateMachine(settings.trick))
    shell.run()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Magic calculator starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        elif settings.is_console:
            logger.info("Running in console mode")
            run_console(settings)
        else:
            logger.error(f"Unknown environment: {settings.env}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Magic calculator stopped")


if __name__ == "__main__":
    main()
