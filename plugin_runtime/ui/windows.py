from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..models import DisplayAttributes, WindowKind

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "active"
STATUS_NEW = "new"


@dataclass
class WindowLine:
    text: str
    attrs: DisplayAttributes
    show_char: str = "!"
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(eq=False)
class Window:
    tag: str
    kind: WindowKind
    lines: List[WindowLine] = field(default_factory=list)
    status: str = ""
    refreshes: int = 0


class WindowTable:
    """In-memory window list of the host.

    Position 1 is always the console. Positions are recomputed from the list
    on every lookup, so closing a window shifts the ones after it.
    """

    def __init__(self, console_tag: str = "console"):
        self._windows: List[Window] = [Window(tag=console_tag, kind=WindowKind.CONSOLE)]
        self._current: Window = self._windows[0]

    @property
    def console(self) -> Window:
        return self._windows[0]

    @property
    def current(self) -> Window:
        return self._current

    def windows(self) -> List[Window]:
        return list(self._windows)

    def get_by_tag(self, tag: str) -> Optional[Window]:
        for win in self._windows:
            if win.tag == tag:
                return win
        return None

    def get_by_num(self, num: int) -> Optional[Window]:
        if 1 <= num <= len(self._windows):
            return self._windows[num - 1]
        return None

    def num(self, win: Window) -> Optional[int]:
        for i, w in enumerate(self._windows):
            if w is win:
                return i + 1
        return None

    def new(self, tag: str, kind: WindowKind) -> Window:
        if self.get_by_tag(tag) is not None:
            raise ValueError(f"window '{tag}' already exists")
        win = Window(tag=tag, kind=kind)
        self._windows.append(win)
        logger.debug("Created %s window %s at %d", kind.value, tag, len(self._windows))
        return win

    def close(self, tag: str) -> bool:
        win = self.get_by_tag(tag)
        if win is None or win is self.console:
            return False
        if win is self._current:
            self.switch(1)
        self._windows.remove(win)
        return True

    def is_current(self, win: Window) -> bool:
        return win is self._current

    def switch(self, num: int) -> bool:
        win = self.get_by_num(num)
        if win is None:
            return False
        self._current = win
        if win.status == STATUS_NEW:
            win.status = STATUS_ACTIVE
        self.refresh(win)
        return True

    def refresh(self, win: Window) -> None:
        win.refreshes += 1

    def status_bar_active(self, num: int) -> None:
        win = self.get_by_num(num)
        if win is not None:
            win.status = STATUS_ACTIVE

    def status_bar_new(self, num: int) -> None:
        win = self.get_by_num(num)
        if win is not None and not self.is_current(win):
            win.status = STATUS_NEW

    def append(self, win: Window, text: str, attrs: DisplayAttributes, show_char: str = "!") -> WindowLine:
        line = WindowLine(text=text, attrs=attrs, show_char=show_char)
        win.lines.append(line)
        return line
