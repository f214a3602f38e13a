from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from .errors import RegistrationError


# (callback, args) -> result, in the plugin's own calling convention
Trampoline = Callable[[Any, Sequence[Any]], Any]


@runtime_checkable
class PluginCallback(Protocol):
    """Opaque invocation handle produced by a plugin-runtime adapter."""

    plugin: str

    def invoke(self, *args: Any) -> Any: ...


def python_trampoline(callback: Any, args: Sequence[Any]) -> Any:
    return callback(*args)


def python_command_trampoline(callback: Any, args: Sequence[Any]) -> bool:
    """Python command callbacks keep the host running unless they return False."""
    result = callback(*args)
    if result is None:
        return True
    return bool(result)


@dataclass(frozen=True)
class CallbackHandle:
    callback: Any
    trampoline: Trampoline = python_trampoline
    plugin: str = ""

    def invoke(self, *args: Any) -> Any:
        return self.trampoline(self.callback, args)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", None) or repr(self.callback)
        return f"CallbackHandle(plugin={self.plugin!r}, callback={name})"


def as_callback(obj: Any, plugin: str, trampoline: Trampoline = python_trampoline) -> PluginCallback:
    if isinstance(obj, PluginCallback):
        return obj
    if not callable(obj):
        raise RegistrationError(f"callback for plugin '{plugin}' is not callable: {obj!r}")
    return CallbackHandle(callback=obj, trampoline=trampoline, plugin=plugin)
