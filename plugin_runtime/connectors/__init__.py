from .notifier import LogNotifier, Notifier

__all__ = ["LogNotifier", "Notifier"]
