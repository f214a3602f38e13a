from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .core.callbacks import as_callback, python_command_trampoline
from .core.errors import DuplicateRegistrationError
from .core.parser import normalize_command
from .core.registry import CommandSpec
from .models import StyleHint, WindowKind

if TYPE_CHECKING:
    from .host import Host


class PluginApi:
    """Everything one plugin may call on the host.

    Registration calls return nothing. Malformed or duplicate registrations
    raise ``RegistrationError`` back into the plugin's init code.
    """

    def __init__(self, host: "Host", plugin: str):
        self.host = host
        self.plugin = plugin
        self.logger = logging.getLogger(f"plugin_runtime.plugins.{plugin}")

    # Registration ---------------------------------------------------------
    def register_command(
        self,
        name: str,
        min_args: int,
        max_args: int,
        usage: str,
        short_help: str,
        long_help: str,
        callback: Any,
    ) -> None:
        if isinstance(name, str):
            name = normalize_command(name)
            if self.host.is_builtin(name):
                raise DuplicateRegistrationError("command", name, "host")
        spec = CommandSpec(
            name=name,
            min_args=min_args,
            max_args=max_args,
            usage=usage or "",
            short_help=short_help or "",
            long_help=long_help or "",
            callback=as_callback(callback, self.plugin, python_command_trampoline),
            plugin=self.plugin,
        )
        self.host.registry.register_command(spec)

    def register_timed(self, callback: Any, interval_seconds: int) -> None:
        self.host.registry.register_timed(as_callback(callback, self.plugin), interval_seconds, plugin=self.plugin)

    def register_autocomplete(self, key: str, items: Iterable[str]) -> None:
        self.host.autocomplete.register(key, items, plugin=self.plugin)

    def register_window_handler(self, tag: str, callback: Any) -> None:
        handle = as_callback(callback, self.plugin) if callback is not None else None
        self.host.mediator.bind(tag, handle, plugin=self.plugin)

    # Console --------------------------------------------------------------
    def cons_show(self, message: Optional[str]) -> None:
        if message is not None:
            self.host.cons_show(message)

    def cons_alert(self) -> None:
        self.host.cons_alert()

    def notify(self, message: str, category: str = "", timeout_ms: int = 5000) -> None:
        self.host.notifier.notify(message, timeout_ms, category)

    def send_line(self, line: str) -> bool:
        return self.host.process_input(line)

    def get_current_recipient(self) -> Optional[str]:
        current = self.host.windows.current
        if current.kind == WindowKind.CHAT:
            return current.tag
        return None

    # Logging --------------------------------------------------------------
    def log_debug(self, message: str) -> None:
        self.logger.debug("%s", message)

    def log_info(self, message: str) -> None:
        self.logger.info("%s", message)

    def log_warning(self, message: str) -> None:
        self.logger.warning("%s", message)

    def log_error(self, message: str) -> None:
        self.logger.error("%s", message)

    # Windows --------------------------------------------------------------
    def win_exists(self, tag: str) -> bool:
        return self.host.mediator.exists(tag)

    def win_create(self, tag: str, callback: Any = None) -> None:
        self.register_window_handler(tag, callback)

    def win_focus(self, tag: str) -> None:
        self.host.mediator.focus(tag)

    def win_show(self, tag: str, line: str, style: StyleHint | str = StyleHint.PLAIN) -> None:
        self.host.mediator.post_line(tag, line, style)

    def win_show_green(self, tag: str, line: str) -> None:
        self.win_show(tag, line, StyleHint.GOOD)

    def win_show_red(self, tag: str, line: str) -> None:
        self.win_show(tag, line, StyleHint.BAD)

    def win_show_cyan(self, tag: str, line: str) -> None:
        self.win_show(tag, line, StyleHint.CAUTIONARY)

    def win_show_yellow(self, tag: str, line: str) -> None:
        self.win_show(tag, line, StyleHint.INCOMING_HIGHLIGHT)
