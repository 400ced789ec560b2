from __future__ import annotations

import asyncio
import logging
import shutil
import sys
from dataclasses import dataclass
from typing import Sequence

from noti.config.store import LayeredConfig
from noti.core.models import Notification
from noti.errors import DispatchError

logger = logging.getLogger(__name__)


async def run_command(argv: Sequence[str], *, service: str) -> None:
    if shutil.which(argv[0]) is None:
        raise DispatchError(f"Command not found: {argv[0]}", service=service)
    logger.debug("dispatch.run_command service=%s argv=%s", service, list(argv))
    process = await asyncio.create_subprocess_exec(
        *argv,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.PIPE,
    )
    _, stderr = await process.communicate()
    if process.returncode != 0:
        detail = stderr.decode("utf-8", errors="replace").strip()
        raise DispatchError(f"{argv[0]} exited with status {process.returncode}: {detail}", service=service)


def _applescript_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass(frozen=True, slots=True)
class BannerNotifier:
    platform: str = sys.platform

    def build_command(self, notification: Notification, settings: LayeredConfig) -> list[str]:
        if self.platform == "darwin":
            sound_key = "nsuser.soundNameFail" if notification.failed else "nsuser.soundName"
            script = (
                f"display notification {_applescript_string(notification.message)} "
                f"with title {_applescript_string(notification.title)}"
            )
            sound_name = settings.get_string(sound_key)
            if sound_name:
                script += f" sound name {_applescript_string(sound_name)}"
            return ["osascript", "-e", script]
        if self.platform.startswith("linux") or "bsd" in self.platform:
            urgency = "critical" if notification.failed else "normal"
            return ["notify-send", "--urgency", urgency, notification.title, notification.message]
        raise DispatchError(f"Banner notifications are not supported on {self.platform}", service="banner")

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        await run_command(self.build_command(notification, settings), service="banner")


@dataclass(frozen=True, slots=True)
class SpeechNotifier:
    platform: str = sys.platform

    def build_command(self, notification: Notification, settings: LayeredConfig) -> list[str]:
        text = f"{notification.title} {notification.message}"
        if self.platform == "darwin":
            voice = settings.get_string("say.voice")
            return ["say", *(["-v", voice] if voice else []), text]
        if self.platform.startswith("linux") or "bsd" in self.platform:
            voice = settings.get_string("espeak.voiceName")
            return ["espeak", *(["-v", voice] if voice else []), text]
        raise DispatchError(f"Speech notifications are not supported on {self.platform}", service="speech")

    async def send(self, notification: Notification, settings: LayeredConfig) -> None:
        await run_command(self.build_command(notification, settings), service="speech")
