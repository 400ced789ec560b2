from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Mapping, Optional

from noti.config.store import LayeredConfig
from noti.core.models import DispatchResult, Notification
from noti.dispatch.interfaces import Notifier
from noti.dispatch.registry import default_notifiers
from noti.errors import DispatchError
from noti.services import ServiceName

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, notifiers: Optional[Mapping[ServiceName, Notifier]] = None) -> None:
        self._notifiers = dict(notifiers) if notifiers is not None else default_notifiers()

    async def _send_one(
        self,
        service: ServiceName,
        notification: Notification,
        settings: LayeredConfig,
    ) -> DispatchResult:
        notifier = self._notifiers.get(service)
        if notifier is None:
            logger.error("dispatch.no_notifier service=%s", service)
            return DispatchResult(service=str(service), ok=False, error="No notifier registered.")
        try:
            await notifier.send(notification, settings)
        except DispatchError as e:
            logger.error("dispatch.failed service=%s error=%s", service, e)
            return DispatchResult(service=str(service), ok=False, error=str(e))
        except Exception as e:
            logger.exception("dispatch.unexpected_error service=%s", service)
            return DispatchResult(service=str(service), ok=False, error=f"{type(e).__name__}: {e}")
        logger.info("dispatch.sent service=%s", service)
        return DispatchResult(service=str(service), ok=True)

    async def dispatch(
        self,
        services: Iterable[ServiceName],
        notification: Notification,
        settings: LayeredConfig,
    ) -> list[DispatchResult]:
        """Send to every service concurrently. A failing service never stops the others."""
        ordered = sorted(set(services), key=lambda s: s.value)
        if not ordered:
            logger.info("dispatch.no_services")
            return []
        return list(
            await asyncio.gather(*(self._send_one(service, notification, settings) for service in ordered))
        )
