"""Notification services and the dispatcher that fans out to them."""

from noti.dispatch.dispatcher import NotificationDispatcher
from noti.dispatch.interfaces import Notifier
from noti.dispatch.registry import default_notifiers, get_notifier

__all__ = ["NotificationDispatcher", "Notifier", "default_notifiers", "get_notifier"]
