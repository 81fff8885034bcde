from .notifier import DEFAULT_HISTORY_SIZE, Notification, Notifier, Sink

__all__ = ["DEFAULT_HISTORY_SIZE", "Notification", "Notifier", "Sink"]
