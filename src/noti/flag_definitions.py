from __future__ import annotations

from noti.config.flags import FlagSet
from noti.services import ServiceName

SERVICE_FLAG_SHORTHANDS: dict[ServiceName, str] = {
    ServiceName.BANNER: "b",
    ServiceName.SPEECH: "s",
    ServiceName.BEARYCHAT: "c",
    ServiceName.HIPCHAT: "i",
    ServiceName.PUSHBULLET: "p",
    ServiceName.PUSHOVER: "o",
    ServiceName.PUSHSAFER: "u",
    ServiceName.SIMPLEPUSH: "l",
    ServiceName.SLACK: "k",
}


def new_flag_set(name: str = "noti") -> FlagSet:
    return FlagSet(name, description="Monitor a process and trigger a notification.")


def define_flags(flags: FlagSet) -> None:
    flags.string_flag("title", shorthand="t", help="Set notification title. Default is utility name.")
    flags.string_flag("message", shorthand="m", help='Set notification message. Default is "Done!".')
    flags.string_flag("file", shorthand="f", help="Path to a config file. Disables the config file search.")
    flags.bool_flag("verbose", shorthand="v", help="Enable verbose mode.")
    flags.bool_flag("dotenv", default=True, help="Load a .env file from the current directory.")
    flags.bool_flag("version", help="Print noti version and exit.")

    for service in ServiceName:
        flags.bool_flag(
            service.value,
            shorthand=SERVICE_FLAG_SHORTHANDS.get(service),
            help=f"Trigger a {service.value} notification.",
        )
