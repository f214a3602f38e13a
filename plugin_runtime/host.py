from __future__ import annotations

import asyncio
import logging
import time
from typing import AsyncIterator, Callable, Dict, List, Optional

from .api import PluginApi
from .connectors.notifier import LogNotifier, Notifier
from .core.autocomplete import AutocompleteBinder
from .core.dispatcher import Dispatcher
from .core.parser import normalize_command, parse_line
from .core.registry import Registry, TimedTask, UnloadReport
from .core.scheduler import TimerScheduler
from .models import StyleHint, UiConfig, WindowKind
from .settings import Settings, get_settings
from .ui.loader import load_ui, render_screen
from .ui.mediator import WindowMediator
from .ui.windows import WindowTable

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str, path: Optional[str] = None):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=path or None,
    )


class Host:
    """Top-level client state that owns the plugin runtime.

    One instance per running client. Input handling and timer ticks both run
    on the caller's thread (or event loop) and never overlap.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        notifier: Optional[Notifier] = None,
        ui: Optional[UiConfig] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.ui = ui or load_ui(self.settings.UI_PATH)
        self.registry = Registry(clock=clock)
        self.windows = WindowTable(console_tag=self.settings.CONSOLE_TAG)
        self.mediator = WindowMediator(
            self.registry,
            self.windows,
            self.ui,
            unknown_policy=self.settings.UNKNOWN_WINDOW_POLICY,
        )
        self.dispatcher = Dispatcher(self.registry)
        self.scheduler = TimerScheduler(self.registry)
        self.autocomplete = AutocompleteBinder(self.registry)
        self.notifier: Notifier = notifier or LogNotifier()
        self.running = True
        self._plugins: Dict[str, PluginApi] = {}
        self._builtins: Dict[str, Callable[[List[str]], bool]] = {
            "/help": self._cmd_help,
            "/quit": self._cmd_quit,
        }

    # Plugins --------------------------------------------------------------
    def plugin_api(self, name: str) -> PluginApi:
        api = self._plugins.get(name)
        if api is None:
            api = PluginApi(self, name)
            self._plugins[name] = api
            logger.info("Plugin %s attached", name)
        return api

    def plugins(self) -> List[str]:
        return list(self._plugins.keys())

    def unload_plugin(self, name: str) -> UnloadReport:
        report = self.registry.unload_plugin(name)
        for tag in report.windows:
            self.windows.close(tag)
        for key in report.autocompletes:
            self.autocomplete.reset(key)
        self._plugins.pop(name, None)
        return report

    def is_builtin(self, name: str) -> bool:
        return name in self._builtins

    # Console --------------------------------------------------------------
    def cons_show(self, message: str, style: StyleHint = StyleHint.PLAIN) -> None:
        self.mediator.post_line(self.windows.console.tag, message, style)

    def cons_alert(self) -> None:
        self.windows.status_bar_new(1)

    def complete(self, line: str) -> Optional[str]:
        return self.autocomplete.complete_line(line)

    # Input ----------------------------------------------------------------
    def process_input(self, line: str) -> bool:
        """Handle one input line; False asks the client to exit."""
        self.autocomplete.reset()
        cmd, argv = parse_line(line)
        if cmd is None:
            return self._plain_text((line or "").strip())

        builtin = self._builtins.get(cmd)
        if builtin is not None:
            return builtin(argv)

        result = self.dispatcher.dispatch(cmd, argv)
        if not result.found:
            self.cons_show(f"Unknown command: {cmd}")
            return True
        if result.usage is not None:
            self.cons_show(f"Usage: {result.usage}")
            return True
        if result.error is not None:
            self.cons_show(f"Command {cmd} failed: {result.error}", StyleHint.BAD)
            return True
        if not result.keep_running:
            self.running = False
        return bool(result.keep_running)

    def _plain_text(self, text: str) -> bool:
        if not text:
            return True
        current = self.windows.current
        if current.kind == WindowKind.PLUGIN and self.mediator.handle_input(current.tag, text):
            return True
        self.cons_show(f"Unknown command: {text}")
        return True

    def _cmd_quit(self, argv: List[str]) -> bool:
        self.running = False
        return False

    def _cmd_help(self, argv: List[str]) -> bool:
        if argv:
            name = normalize_command(argv[0])
            spec = self.registry.get_command(name)
            if spec is None:
                self.cons_show(f"No such command: {name}")
                return True
            lines = render_screen(self.ui, "command_help", {
                "name": spec.name,
                "usage": spec.usage,
                "short_help": spec.short_help,
                "long_help": spec.long_help or spec.short_help,
            })
        else:
            specs = sorted(self.registry.commands(), key=lambda s: s.name)
            if specs:
                rows = [[s.name, s.short_help] for s in specs]
                lines = render_screen(self.ui, "help", {"command_rows": rows})
            else:
                lines = render_screen(self.ui, "help_empty", {})
        for text in lines:
            self.cons_show(text)
        return True

    # Timers ---------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> List[TimedTask]:
        return self.scheduler.tick(now)

    async def _tick_loop(self, stopped: asyncio.Event) -> None:
        while True:
            await asyncio.sleep(self.settings.TICK_INTERVAL_SEC)
            self.tick()
            # a timed task may have asked to quit
            if not self.running:
                stopped.set()
                return

    async def run(self, lines: AsyncIterator[str]) -> None:
        """Consume input lines while ticking timers on the same event loop.

        Returns when the input ends or once ``running`` goes False, whether
        from a top-level command, a plugin's ``send_line`` or a timed task.
        """
        stopped = asyncio.Event()
        ticker = asyncio.create_task(self._tick_loop(stopped))
        stop_wait = asyncio.create_task(stopped.wait())
        source = lines.__aiter__()
        try:
            while self.running:
                pending = asyncio.create_task(_next_line(source))
                done, _ = await asyncio.wait({pending, stop_wait}, return_when=asyncio.FIRST_COMPLETED)
                if pending not in done:
                    pending.cancel()
                    try:
                        await pending
                    except asyncio.CancelledError:
                        pass
                    break
                line = pending.result()
                if line is None:
                    break
                if not self.process_input(line) or not self.running:
                    break
        finally:
            for task in (stop_wait, ticker):
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
                except Exception:
                    logger.exception("Background task failed")

    def shutdown(self) -> None:
        for tag in self.registry.window_tags():
            self.windows.close(tag)
        self.registry.clear()
        self.autocomplete.reset()
        self._plugins.clear()
        self.running = False
        logger.info("Plugin runtime shut down")


async def _next_line(source: AsyncIterator[str]) -> Optional[str]:
    try:
        return await source.__anext__()
    except StopAsyncIteration:
        return None
