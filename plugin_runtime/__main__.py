"""
Run the plugin host against standard input.

Usage:
    python -m plugin_runtime [--log-level LEVEL] [--log-path FILE] [--ui UI_YAML] [--tick SECONDS]

Each stdin line is handled as typed input; new window lines are echoed to
stdout prefixed with their window tag. /quit exits.
"""
import argparse
import asyncio
import sys
from typing import AsyncIterator, Dict

from .host import Host, setup_logging
from .settings import get_settings


class _Echo:
    def __init__(self, host: Host):
        self.host = host
        self._printed: Dict[int, int] = {}

    def flush(self) -> None:
        for win in self.host.windows.windows():
            start = self._printed.get(id(win), 0)
            for line in win.lines[start:]:
                print(f"[{win.tag}] {line.text}")
            self._printed[id(win)] = len(win.lines)


async def _stdin_lines(echo: _Echo) -> AsyncIterator[str]:
    while True:
        # blocking read off the loop thread; plugin code stays on the loop
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        yield line.rstrip("\n")
        echo.flush()


async def main():
    parser = argparse.ArgumentParser(description="Plugin host for the terminal client")
    parser.add_argument("--log-level", default=None, help="Logging level (default from LOG_LEVEL)")
    parser.add_argument("--log-path", default=None, help="Write logs to this file instead of stderr")
    parser.add_argument("--ui", default=None, help="UI YAML with styles and screens")
    parser.add_argument("--tick", type=float, default=None, help="Seconds between timer passes")
    args = parser.parse_args()

    overrides = {}
    if args.ui is not None:
        overrides["UI_PATH"] = args.ui
    if args.tick is not None:
        overrides["TICK_INTERVAL_SEC"] = args.tick
    settings = get_settings().model_copy(update=overrides)
    setup_logging(args.log_level or settings.LOG_LEVEL, args.log_path or settings.LOG_PATH or None)

    host = Host(settings)
    echo = _Echo(host)
    try:
        await host.run(_stdin_lines(echo))
    finally:
        echo.flush()
        host.shutdown()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
