from .notification_provider import NotificationProvider, ResponseUrlProvider, NotificationError

__all__ = ["NotificationProvider", "ResponseUrlProvider", "NotificationError"]
