from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .callbacks import PluginCallback
from .errors import DuplicateRegistrationError, RegistrationError

logger = logging.getLogger(__name__)

UNBOUNDED = -1


@dataclass(frozen=True)
class CommandSpec:
    name: str
    min_args: int
    max_args: int
    usage: str
    short_help: str
    long_help: str
    callback: PluginCallback
    plugin: str = ""

    @property
    def unbounded(self) -> bool:
        return self.max_args == UNBOUNDED


@dataclass(eq=False)
class TimedTask:
    callback: PluginCallback
    interval_seconds: int
    last_reset: float
    plugin: str = ""
    enabled: bool = True
    fired: int = 0

    def elapsed(self, now: float) -> float:
        return now - self.last_reset

    def is_due(self, now: float) -> bool:
        return self.enabled and self.elapsed(now) >= self.interval_seconds


@dataclass(frozen=True)
class WindowBinding:
    tag: str
    callback: Optional[PluginCallback]
    plugin: str = ""


@dataclass(frozen=True)
class AutocompleteSet:
    key: str
    items: Tuple[str, ...]
    plugin: str = ""


@dataclass
class UnloadReport:
    plugin: str
    commands: List[str] = field(default_factory=list)
    timed: int = 0
    autocompletes: List[str] = field(default_factory=list)
    windows: List[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.commands or self.timed or self.autocompletes or self.windows)


def _require_text(value: object, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise RegistrationError(f"{what} must be a non-empty string, got {value!r}")
    return value


def _unique_items(items: Iterable[str], key: str) -> Tuple[str, ...]:
    if isinstance(items, str):
        raise RegistrationError(f"autocomplete '{key}': items must be a list of strings, not a string")
    seen: Dict[str, None] = {}
    for item in items:
        if not isinstance(item, str):
            raise RegistrationError(f"autocomplete '{key}': item {item!r} is not a string")
        seen.setdefault(item, None)
    return tuple(seen)


class Registry:
    """Host-owned store of everything plugins have registered.

    Registration only stores; nothing is invoked here. Iteration helpers
    return new lists so callers can keep registering or removing while they
    walk the result.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._commands: Dict[str, CommandSpec] = {}
        self._timed: List[TimedTask] = []
        self._autocompletes: Dict[str, AutocompleteSet] = {}
        self._windows: Dict[str, WindowBinding] = {}

    # Commands ------------------------------------------------------------
    def register_command(self, spec: CommandSpec) -> CommandSpec:
        _require_text(spec.name, "command name")
        if isinstance(spec.min_args, bool) or not isinstance(spec.min_args, int) or spec.min_args < 0:
            raise RegistrationError(f"command '{spec.name}': min_args must be an integer >= 0")
        if isinstance(spec.max_args, bool) or not isinstance(spec.max_args, int):
            raise RegistrationError(f"command '{spec.name}': max_args must be an integer")
        if spec.max_args != UNBOUNDED and spec.max_args < spec.min_args:
            raise RegistrationError(
                f"command '{spec.name}': max_args {spec.max_args} is below min_args {spec.min_args}"
            )
        existing = self._commands.get(spec.name)
        if existing is not None:
            raise DuplicateRegistrationError("command", spec.name, existing.plugin)
        self._commands[spec.name] = spec
        logger.debug("Registered command %s (plugin=%s, args=%s..%s)", spec.name, spec.plugin, spec.min_args, spec.max_args)
        return spec

    def get_command(self, name: str) -> Optional[CommandSpec]:
        return self._commands.get(name)

    def has_command(self, name: str) -> bool:
        return name in self._commands

    def commands(self) -> List[CommandSpec]:
        return list(self._commands.values())

    def remove_command(self, name: str) -> Optional[CommandSpec]:
        return self._commands.pop(name, None)

    # Timed tasks ---------------------------------------------------------
    def register_timed(self, callback: PluginCallback, interval_seconds: int, plugin: str = "") -> TimedTask:
        if isinstance(interval_seconds, bool) or not isinstance(interval_seconds, int):
            raise RegistrationError(f"interval_seconds must be an integer, got {interval_seconds!r}")
        if interval_seconds < 1:
            raise RegistrationError(f"interval_seconds must be >= 1, got {interval_seconds}")
        task = TimedTask(callback=callback, interval_seconds=interval_seconds, last_reset=self.clock(), plugin=plugin)
        self._timed.append(task)
        logger.debug("Registered timed task every %ss (plugin=%s)", interval_seconds, plugin)
        return task

    def timed_tasks(self) -> List[TimedTask]:
        return list(self._timed)

    def contains_timed(self, task: TimedTask) -> bool:
        return any(t is task for t in self._timed)

    def remove_timed(self, task: TimedTask) -> bool:
        for i, t in enumerate(self._timed):
            if t is task:
                del self._timed[i]
                return True
        return False

    # Autocomplete --------------------------------------------------------
    def register_autocomplete(self, key: str, items: Iterable[str], plugin: str = "") -> AutocompleteSet:
        _require_text(key, "autocomplete key")
        values = _unique_items(items, key)
        existing = self._autocompletes.get(key)
        if existing is not None and existing.plugin != plugin:
            raise DuplicateRegistrationError("autocomplete", key, existing.plugin)
        entry = AutocompleteSet(key=key, items=values, plugin=plugin)
        self._autocompletes[key] = entry
        logger.debug("Registered %d autocomplete items under %s (plugin=%s)", len(values), key, plugin)
        return entry

    def autocomplete(self, key: str) -> Optional[AutocompleteSet]:
        return self._autocompletes.get(key)

    def autocomplete_keys(self) -> List[str]:
        return list(self._autocompletes.keys())

    def remove_autocomplete(self, key: str) -> Optional[AutocompleteSet]:
        return self._autocompletes.pop(key, None)

    # Window handlers -----------------------------------------------------
    def register_window_handler(self, tag: str, callback: Optional[PluginCallback], plugin: str = "") -> WindowBinding:
        _require_text(tag, "window tag")
        existing = self._windows.get(tag)
        if existing is not None:
            raise DuplicateRegistrationError("window", tag, existing.plugin)
        binding = WindowBinding(tag=tag, callback=callback, plugin=plugin)
        self._windows[tag] = binding
        logger.debug("Registered window handler %s (plugin=%s)", tag, plugin)
        return binding

    def window_binding(self, tag: str) -> Optional[WindowBinding]:
        return self._windows.get(tag)

    def window_tags(self) -> List[str]:
        return list(self._windows.keys())

    def remove_window_handler(self, tag: str) -> Optional[WindowBinding]:
        return self._windows.pop(tag, None)

    # Lifecycle -----------------------------------------------------------
    def unload_plugin(self, plugin: str) -> UnloadReport:
        report = UnloadReport(plugin=plugin)
        for spec in self.commands():
            if spec.plugin == plugin:
                self.remove_command(spec.name)
                report.commands.append(spec.name)
        kept = [t for t in self._timed if t.plugin != plugin]
        report.timed = len(self._timed) - len(kept)
        self._timed[:] = kept
        for key, entry in list(self._autocompletes.items()):
            if entry.plugin == plugin:
                del self._autocompletes[key]
                report.autocompletes.append(key)
        for tag, binding in list(self._windows.items()):
            if binding.plugin == plugin:
                del self._windows[tag]
                report.windows.append(tag)
        logger.info(
            "Unloaded plugin %s: %d commands, %d timed, %d autocompletes, %d windows",
            plugin, len(report.commands), report.timed, len(report.autocompletes), len(report.windows),
        )
        return report

    def clear(self) -> None:
        self._commands.clear()
        self._timed.clear()
        self._autocompletes.clear()
        self._windows.clear()
