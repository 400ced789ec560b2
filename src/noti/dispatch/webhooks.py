from __future__ import annotations

import json
from dataclasses import dataclass
from urllib.parse import quote

from noti.config.store import LayeredConfig
from noti.core.models import Notification
from noti.dispatch import http
from noti.errors import DispatchError


def _require(settings: LayeredConfig, service: str, *keys: str) -> list[str]:
    values = [settings.get_string(key) for key in keys]
    missing = [key for key, value in zip(keys, values) if not value]
    if missing:
        raise DispatchError(f"Missing required settings: {', '.join(missing)}", service=service)
    return values


def _decode_json(response: http.HttpResponse, service: str) -> dict:
    try:
        payload = json.loads(response.text)
    except ValueError as exc:
        raise DispatchError("Response is not valid JSON.", service=service) from exc
    if not isinstance(payload, dict):
        raise DispatchError("Response is not a JSON object.", service=service)
    return payload


@dataclass(frozen=True, slots=True)
class SlackNotifier:
    api_url: str = "https://slack.com/api/chat.postMessage"

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        token, channel = _require(settings, "slack", "slack.token", "slack.channel")
        response = await http.post(
            self.api_url,
            service="slack",
            data={
                "token": token,
                "channel": channel,
                "text": f"{notification.title}\n{notification.message}",
                "username": settings.get_string("slack.username"),
            },
        )
        payload = _decode_json(response, "slack")
        if not payload.get("ok"):
            raise DispatchError(f"Slack API error: {payload.get('error', 'unknown')}", service="slack")


@dataclass(frozen=True, slots=True)
class PushbulletNotifier:
    api_url: str = "https://api.pushbullet.com/v2/pushes"

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        (access_token,) = _require(settings, "pushbullet", "pushbullet.accessToken")
        body = {"type": "note", "title": notification.title, "body": notification.message}
        device_iden = settings.get_string("pushbullet.deviceIden")
        if device_iden:
            body["device_iden"] = device_iden
        await http.post(self.api_url, service="pushbullet", json=body, headers={"Access-Token": access_token})


@dataclass(frozen=True, slots=True)
class PushoverNotifier:
    api_url: str = "https://api.pushover.net/1/messages.json"

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        api_token, user_key = _require(settings, "pushover", "pushover.apiToken", "pushover.userKey")
        response = await http.post(
            self.api_url,
            service="pushover",
            data={
                "token": api_token,
                "user": user_key,
                "title": notification.title,
                "message": notification.message,
            },
        )
        payload = _decode_json(response, "pushover")
        if payload.get("status") != 1:
            raise DispatchError(f"Pushover API error: {payload.get('errors', 'unknown')}", service="pushover")


@dataclass(frozen=True, slots=True)
class PushsaferNotifier:
    api_url: str = "https://www.pushsafer.com/api"

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        (key,) = _require(settings, "pushsafer", "pushsafer.key")
        response = await http.post(
            self.api_url,
            service="pushsafer",
            data={"k": key, "t": notification.title, "m": notification.message},
        )
        payload = _decode_json(response, "pushsafer")
        if payload.get("status") != 1:
            raise DispatchError(f"Pushsafer API error: {payload.get('error', 'unknown')}", service="pushsafer")


@dataclass(frozen=True, slots=True)
class SimplepushNotifier:
    api_url: str = "https://api.simplepush.io/send"

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        (key,) = _require(settings, "simplepush", "simplepush.key")
        data = {"key": key, "title": notification.title, "msg": notification.message}
        event = settings.get_string("simplepush.event")
        if event:
            data["event"] = event
        await http.post(self.api_url, service="simplepush", data=data)


@dataclass(frozen=True, slots=True)
class BearyChatNotifier:
    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        (hook_uri,) = _require(settings, "bearychat", "bearychat.incomingHookURI")
        await http.post(
            hook_uri,
            service="bearychat",
            json={"text": f"**{notification.title}**\n{notification.message}"},
        )


@dataclass(frozen=True, slots=True)
class HipChatNotifier:
    api_base_url: str = "https://api.hipchat.com/v2"

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        access_token, room = _require(settings, "hipchat", "hipchat.accessToken", "hipchat.room")
        url = f"{self.api_base_url}/room/{quote(room, safe='')}/notification"
        await http.post(
            url,
            service="hipchat",
            json={
                "message": f"{notification.title}: {notification.message}",
                "message_format": "text",
                "notify": True,
                "color": "red" if notification.failed else "green",
            },
            headers={"Authorization": f"Bearer {access_token}"},
        )
