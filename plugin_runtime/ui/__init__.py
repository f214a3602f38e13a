from .loader import load_ui, render_screen
from .mediator import WindowMediator
from .renderer import render_blocks
from .windows import Window, WindowLine, WindowTable

__all__ = [
    "Window",
    "WindowLine",
    "WindowMediator",
    "WindowTable",
    "load_ui",
    "render_blocks",
    "render_screen",
]
