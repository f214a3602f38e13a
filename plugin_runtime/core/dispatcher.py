from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from .registry import Registry
from .validator import validate_args

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    command: str
    found: bool
    invoked: bool = False
    keep_running: Any = True
    usage: Optional[str] = None
    error: Optional[str] = None


class Dispatcher:
    def __init__(self, registry: Registry):
        self.registry = registry

    def dispatch(self, name: str, argv: Sequence[str]) -> DispatchResult:
        spec = self.registry.get_command(name)
        if spec is None:
            # reported by the caller (line parser / host)
            return DispatchResult(command=name, found=False)

        args: List[str] = list(argv)
        problem = validate_args(spec, args)
        if problem:
            logger.debug("Command %s rejected: %s", name, problem)
            return DispatchResult(command=name, found=True, usage=spec.usage)

        try:
            keep_running = spec.callback.invoke(args)
        except Exception as e:
            logger.exception("Command %s from plugin %s failed", name, spec.plugin or "?")
            return DispatchResult(command=name, found=True, invoked=True, error=str(e) or type(e).__name__)
        return DispatchResult(command=name, found=True, invoked=True, keep_running=keep_running)
