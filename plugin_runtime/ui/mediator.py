from __future__ import annotations

import logging
from typing import Optional, Union

from ..core.callbacks import PluginCallback
from ..core.errors import DuplicateRegistrationError, RegistrationError
from ..core.registry import Registry
from ..models import StyleHint, UiConfig, WindowKind
from .windows import Window, WindowTable

logger = logging.getLogger(__name__)

POLICY_IGNORE = "ignore"
POLICY_CREATE = "create"


class WindowMediator:
    """Plugin-facing view of the host window table, addressed by tag.

    Window positions are looked up by tag on every call; plugins never see or
    keep a position. Style hints are turned into display attributes here.
    """

    def __init__(
        self,
        registry: Registry,
        windows: WindowTable,
        ui: Optional[UiConfig] = None,
        *,
        unknown_policy: str = POLICY_IGNORE,
    ) -> None:
        if unknown_policy not in (POLICY_IGNORE, POLICY_CREATE):
            raise ValueError(f"unknown window policy: {unknown_policy}")
        self.registry = registry
        self.windows = windows
        self.ui = ui or UiConfig()
        self.unknown_policy = unknown_policy

    def exists(self, tag: str) -> bool:
        return self.windows.get_by_tag(tag) is not None

    def ensure_window(self, tag: str) -> Window:
        win = self.windows.get_by_tag(tag)
        if win is not None:
            return win
        if not isinstance(tag, str) or not tag.strip():
            raise RegistrationError(f"window tag must be a non-empty string, got {tag!r}")
        win = self.windows.new(tag, WindowKind.PLUGIN)
        num = self.windows.num(win)
        if num is not None:
            self.windows.status_bar_active(num)
        return win

    def bind(self, tag: str, callback: Optional[PluginCallback], plugin: str = "") -> Window:
        existing = self.registry.window_binding(tag)
        if existing is not None:
            raise DuplicateRegistrationError("window", tag, existing.plugin)
        win = self.windows.get_by_tag(tag)
        if win is not None and win.kind != WindowKind.PLUGIN:
            raise RegistrationError(f"tag '{tag}' belongs to a {win.kind.value} window")
        self.registry.register_window_handler(tag, callback, plugin)
        return self.ensure_window(tag)

    def _resolve(self, tag: str, action: str) -> Optional[Window]:
        win = self.windows.get_by_tag(tag)
        if win is not None:
            return win
        if self.unknown_policy == POLICY_CREATE:
            logger.info("%s: creating missing window %s", action, tag)
            return self.ensure_window(tag)
        logger.warning("%s: no window with tag %s", action, tag)
        return None

    def focus(self, tag: str) -> bool:
        win = self._resolve(tag, "focus")
        if win is None:
            return False
        num = self.windows.num(win)
        return num is not None and self.windows.switch(num)

    def post_line(self, tag: str, text: str, style: Union[StyleHint, str] = StyleHint.PLAIN) -> bool:
        hint = StyleHint(style)
        win = self._resolve(tag, "post_line")
        if win is None:
            return False
        self.windows.append(win, text, self.ui.style_for(hint))
        # only the visible window is redrawn eagerly
        if self.windows.is_current(win):
            self.windows.refresh(win)
        return True

    def handle_input(self, tag: str, line: str) -> bool:
        binding = self.registry.window_binding(tag)
        if binding is None or binding.callback is None:
            return False
        try:
            binding.callback.invoke(tag, line)
        except Exception:
            logger.exception("Window handler for %s from plugin %s failed", tag, binding.plugin or "?")
        return True

    def close(self, tag: str) -> bool:
        self.registry.remove_window_handler(tag)
        return self.windows.close(tag)
