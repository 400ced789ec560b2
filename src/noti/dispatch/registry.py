from __future__ import annotations

from typing import Mapping

from noti.dispatch.desktop import BannerNotifier, SpeechNotifier
from noti.dispatch.interfaces import Notifier
from noti.dispatch.webhooks import (
    BearyChatNotifier,
    HipChatNotifier,
    PushbulletNotifier,
    PushoverNotifier,
    PushsaferNotifier,
    SimplepushNotifier,
    SlackNotifier,
)
from noti.services import ServiceName

_NOTIFIER_TYPES: Mapping[ServiceName, type] = {
    ServiceName.BANNER: BannerNotifier,
    ServiceName.BEARYCHAT: BearyChatNotifier,
    ServiceName.HIPCHAT: HipChatNotifier,
    ServiceName.PUSHBULLET: PushbulletNotifier,
    ServiceName.PUSHOVER: PushoverNotifier,
    ServiceName.PUSHSAFER: PushsaferNotifier,
    ServiceName.SIMPLEPUSH: SimplepushNotifier,
    ServiceName.SLACK: SlackNotifier,
    ServiceName.SPEECH: SpeechNotifier,
}


def get_notifier(service: ServiceName | str) -> Notifier:
    try:
        return _NOTIFIER_TYPES[ServiceName(service)]()
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unsupported notification service: {service}") from e


def default_notifiers() -> dict[ServiceName, Notifier]:
    return {service: get_notifier(service) for service in ServiceName}
