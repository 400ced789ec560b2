from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

from noti.config.defaults import BASE_DEFAULTS, DEFAULTS_KEY
from noti.config.flags import FlagSet
from noti.config.store import LayeredConfig

logger = logging.getLogger(__name__)


class ServiceName(str, Enum):
    BANNER = "banner"
    BEARYCHAT = "bearychat"
    HIPCHAT = "hipchat"
    PUSHBULLET = "pushbullet"
    PUSHOVER = "pushover"
    PUSHSAFER = "pushsafer"
    SIMPLEPUSH = "simplepush"
    SLACK = "slack"
    SPEECH = "speech"

    def __str__(self) -> str:
        return self.value


def parse_service_names(values: Iterable[str]) -> set[ServiceName]:
    services: set[ServiceName] = set()
    for value in values:
        try:
            services.add(ServiceName(value.strip().lower()))
        except ValueError:
            logger.warning("services.unknown_service name=%s", value)
    return services


def _flag_selected_services(flags: FlagSet) -> set[ServiceName]:
    selected: set[ServiceName] = set()
    for service in ServiceName:
        flag = flags.lookup(service.value)
        if flag is not None and flag.changed and flag.value is True:
            selected.add(service)
    return selected


def enabled_services(config: LayeredConfig, flags: FlagSet) -> set[ServiceName]:
    """
    Return the services to notify for this invocation.

    Service flags the user set to true win outright. Otherwise the merged `defaults` key
    applies (environment over file), and when that yields nothing, the built-in default.
    Flags that do not name a service never select anything.
    """
    selected = _flag_selected_services(flags)
    if selected:
        logger.debug("services.selected_by_flags services=%s", sorted(selected))
        return selected

    if config.source_of(DEFAULTS_KEY) in ("env", "file"):
        selected = parse_service_names(config.get_string_list(DEFAULTS_KEY))
        if selected:
            logger.debug("services.selected_by_config services=%s", sorted(selected))
            return selected

    selected = parse_service_names(BASE_DEFAULTS[DEFAULTS_KEY])
    logger.debug("services.selected_by_default services=%s", sorted(selected))
    return selected
