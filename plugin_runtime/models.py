from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class StyleHint(str, Enum):
    PLAIN = "plain"
    GOOD = "good"
    BAD = "bad"
    CAUTIONARY = "cautionary"
    INCOMING_HIGHLIGHT = "incoming-highlight"


class WindowKind(str, Enum):
    CONSOLE = "console"
    CHAT = "chat"
    PLUGIN = "plugin"


class DisplayAttributes(BaseModel):
    colour: str = "default"
    bold: bool = False


DEFAULT_STYLES: Dict[StyleHint, DisplayAttributes] = {
    StyleHint.PLAIN: DisplayAttributes(),
    StyleHint.GOOD: DisplayAttributes(colour="green"),
    StyleHint.BAD: DisplayAttributes(colour="red"),
    StyleHint.CAUTIONARY: DisplayAttributes(colour="cyan"),
    StyleHint.INCOMING_HIGHLIGHT: DisplayAttributes(colour="yellow"),
}


class UiConfig(BaseModel):
    # Keys of `styles` are StyleHint values; unknown hints are rejected on load.
    styles: Dict[StyleHint, DisplayAttributes] = Field(default_factory=dict)
    snippets: Dict[str, List[Any]] = Field(default_factory=dict)
    screens: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def style_for(self, hint: StyleHint) -> DisplayAttributes:
        return self.styles.get(hint) or DEFAULT_STYLES[hint]
