from __future__ import annotations

import shlex
from typing import List, Optional, Tuple


def normalize_command(raw: str) -> str:
    s = raw.strip()
    if not s:
        return s
    if s.startswith("/"):
        s = s[1:]
    return "/" + s


def tokenize_args(text: str) -> List[str]:
    # supports quotes and multiple spaces
    try:
        return shlex.split(text)
    except ValueError:
        # unbalanced quote: fall back to whitespace split
        return [p for p in text.strip().split() if p]


def parse_line(text: str) -> Tuple[Optional[str], List[str]]:
    """Split an input line into (command, argv); command is None for plain text."""
    text = (text or "").strip()
    if not text:
        return None, []
    parts = text.split(maxsplit=1)
    first = parts[0]
    if not first.startswith("/") or first == "/":
        return None, []
    cmd = normalize_command(first)
    rest = parts[1] if len(parts) > 1 else ""
    return cmd, tokenize_args(rest)
