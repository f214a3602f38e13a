from __future__ import annotations

from typing import Optional, Sequence

from .registry import UNBOUNDED, CommandSpec


def arity_error(min_args: int, max_args: int, count: int) -> Optional[str]:
    if count < min_args:
        return f"expected at least {min_args} argument(s), got {count}"
    if max_args != UNBOUNDED and count > max_args:
        return f"expected at most {max_args} argument(s), got {count}"
    return None


def validate_args(spec: CommandSpec, argv: Sequence[str]) -> Optional[str]:
    """Return an error text when argv does not fit the command's arity, else None."""
    return arity_error(spec.min_args, spec.max_args, len(argv))
