from __future__ import annotations

from typing import Protocol

from noti.config.store import LayeredConfig
from noti.core.models import Notification


class Notifier(Protocol):
    """
    Sends one notification through a single service.

    Implementations read their settings from the merged configuration and must not
    modify it. Delivery failures are raised as DispatchError.
    """

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        ...
