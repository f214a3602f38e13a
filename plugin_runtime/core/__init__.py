from .autocomplete import AutocompleteBinder
from .callbacks import CallbackHandle, PluginCallback, as_callback, python_command_trampoline, python_trampoline
from .dispatcher import DispatchResult, Dispatcher
from .errors import DuplicateRegistrationError, PluginRuntimeError, RegistrationError
from .registry import UNBOUNDED, AutocompleteSet, CommandSpec, Registry, TimedTask, UnloadReport, WindowBinding
from .scheduler import TimerScheduler

__all__ = [
    "AutocompleteBinder",
    "AutocompleteSet",
    "CallbackHandle",
    "CommandSpec",
    "DispatchResult",
    "Dispatcher",
    "DuplicateRegistrationError",
    "PluginCallback",
    "PluginRuntimeError",
    "Registry",
    "RegistrationError",
    "TimedTask",
    "TimerScheduler",
    "UNBOUNDED",
    "UnloadReport",
    "WindowBinding",
    "as_callback",
    "python_command_trampoline",
    "python_trampoline",
]
