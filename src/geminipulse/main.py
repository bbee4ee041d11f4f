import asyncio
import sys

import sentry_sdk

from geminipulse.config import Settings, settings
from geminipulse.dashboard import Dashboard
from geminipulse.logging import logger
from geminipulse.version import get_version_info
from geminipulse.view import render_dashboard

CLEAR_SCREEN = "\033[2J\033[H"
QUIT_COMMANDS = {"q", "quit", "exit"}


async def run(config: Settings = settings) -> None:
    """
    Run the dashboard until the user quits.

    Each line typed on stdin is treated as a ticker search; `q` or EOF quits.
    """
    loop = asyncio.get_running_loop()
    dashboard = Dashboard(config)
    done = asyncio.Event()

    def draw() -> None:
        print(CLEAR_SCREEN + render_dashboard(dashboard), flush=True)
        print("Search ticker (e.g. AMD), q to quit: ", end="", flush=True)

    def on_input() -> None:
        line = sys.stdin.readline()
        if not line or line.strip().lower() in QUIT_COMMANDS:
            done.set()
            return
        dashboard.search(line)
        draw()

    dashboard.start()
    dashboard.scheduler.every("render", config.render_interval, draw)
    loop.add_reader(sys.stdin, on_input)
    try:
        draw()
        await done.wait()
    finally:
        loop.remove_reader(sys.stdin)
        await dashboard.stop()


def main() -> None:
    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.sentry_environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            attach_stacktrace=True,
        )
        logger.info(
            "Sentry initialized environment={environment} traces_sample_rate={traces_sample_rate}",
            environment=settings.sentry_environment,
            traces_sample_rate=settings.sentry_traces_sample_rate,
        )

    logger.info("Starting GeminiPulse version={version}", version=get_version_info())
    if not settings.api_key:
        logger.warning("API_KEY not set, market analysis is disabled")

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:  # pragma: no cover
        logger.info("Stopping GeminiPulse")


if __name__ == "__main__":  # pragma: no cover
    main()
