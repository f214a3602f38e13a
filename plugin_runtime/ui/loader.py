from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from ..models import UiConfig
from .renderer import render_blocks

logger = logging.getLogger(__name__)

DEFAULT_SCREENS: Dict[str, Dict[str, Any]] = {
    "help": {
        "blocks": [
            {"header": "Plugin commands"},
            {"table": "command_rows"},
            {"paragraph": "Use /help <command> for details."},
        ],
    },
    "help_empty": {
        "blocks": [
            {"paragraph": "No plugin commands registered."},
        ],
    },
    "command_help": {
        "blocks": [
            {"header": "{name}"},
            {"paragraph": "Usage: {usage}"},
            {"divider": True},
            {"paragraph": "{long_help}"},
        ],
    },
}


@lru_cache(maxsize=8)
def load_ui(path: str) -> UiConfig:
    p = (path or "").strip()
    if not p or not os.path.exists(p):
        return UiConfig()
    try:
        with open(p, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return UiConfig.model_validate(raw)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.warning("Ignoring UI config %s: %s", p, e)
        return UiConfig()


def _expand_includes(blocks: List[Dict[str, Any]], ui: UiConfig) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for b in blocks or []:
        if isinstance(b, dict) and "include" in b:
            sub = ui.snippets.get(b.get("include"))
            if isinstance(sub, list):
                out.extend(_expand_includes(sub, ui))
            continue
        out.append(b)
    return out


def render_screen(ui: UiConfig, key: str, data: Dict[str, Any]) -> List[str]:
    scr = ui.screens.get(key) or DEFAULT_SCREENS.get(key) or {}
    blocks = scr.get("blocks")
    if not isinstance(blocks, list):
        return []
    return render_blocks(_expand_includes(blocks, ui), data=data)
