import sys
from typing import List

from quartz_monitor.core import setup_logging
from quartz_monitor.core.container import ServiceContainer
from quartz_monitor.core.logging import LogContext
from quartz_monitor.terminal_ui import QuartzMonitorApp

logger = LogContext(__name__)


def main(argv: List[str] | None = None) -> None:
    """Run the terminal app, optionally opened at a deep link URL"""
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()

    services = ServiceContainer()
    if argv:
        if services.deep_links.handle(argv[0]) is None:
            logger.warning("Ignoring unrecognised link", extra={"url": argv[0]})

    QuartzMonitorApp(services).run()


if __name__ == "__main__":
    main()
