from __future__ import annotations

from typing import Mapping, Sequence, Union

from noti.config.store import LayeredConfig

SettingValue = Union[str, Sequence[str]]

DEFAULTS_KEY = "defaults"

# Flat dotted keys. Every recognized configuration key has an entry here.
BASE_DEFAULTS: Mapping[str, SettingValue] = {
    DEFAULTS_KEY: ("banner",),
    "message": "Done!",
    "log.level": "WARNING",
    "log.file": "",
    "nsuser.soundName": "Ping",
    "nsuser.soundNameFail": "Basso",
    "say.voice": "Alex",
    "espeak.voiceName": "english-us",
    "bearychat.incomingHookURI": "",
    "hipchat.accessToken": "",
    "hipchat.room": "",
    "pushbullet.accessToken": "",
    "pushbullet.deviceIden": "",
    "pushover.apiToken": "",
    "pushover.userKey": "",
    "pushsafer.key": "",
    "simplepush.key": "",
    "simplepush.event": "",
    "slack.token": "",
    "slack.channel": "",
    "slack.username": "noti",
}


def set_noti_defaults(config: LayeredConfig) -> None:
    for key, value in BASE_DEFAULTS.items():
        config.set_default(key, value)
