"""Plugin runtime for a terminal chat client: commands, timers, autocomplete and plugin windows."""

from .api import PluginApi
from .host import Host, setup_logging
from .models import StyleHint

__all__ = ["Host", "PluginApi", "StyleHint", "setup_logging"]
