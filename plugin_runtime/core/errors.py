from __future__ import annotations


class PluginRuntimeError(Exception):
    """Base class for errors raised by the plugin runtime."""


class RegistrationError(PluginRuntimeError, ValueError):
    """A registration call carried malformed fields and was rejected."""


class DuplicateRegistrationError(RegistrationError):
    """The name, tag or key is already registered."""

    def __init__(self, kind: str, key: str, owner: str | None = None) -> None:
        self.kind = kind
        self.key = key
        self.owner = owner
        detail = f" by plugin '{owner}'" if owner else ""
        super().__init__(f"{kind} '{key}' already registered{detail}")
