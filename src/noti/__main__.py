from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import Optional, Sequence

from noti import __version__
from noti.config import ConfigLoadRequest, FlagSet, LayeredConfig, configure_app, load_logging_settings
from noti.core.models import Notification
from noti.dispatch import NotificationDispatcher
from noti.errors import ConfigParseError
from noti.flag_definitions import define_flags, new_flag_set
from noti.logging import init_logging
from noti.services import enabled_services

logger = logging.getLogger(__name__)


async def _run_utility(argv: Sequence[str]) -> int:
    logger.debug("app.running_utility argv=%s", list(argv))
    try:
        process = await asyncio.create_subprocess_exec(*argv)
    except FileNotFoundError:
        logger.error("app.utility_not_found utility=%s", argv[0])
        return 127
    return await process.wait()


def _build_notification(config: LayeredConfig, utility: Sequence[str], exit_code: int) -> Notification:
    title = config.get_string("title")
    if not title:
        title = os.path.basename(utility[0]) if utility else "noti"
    return Notification(title=title, message=config.get_string("message"), failed=exit_code != 0)


async def _main_async(flags: FlagSet, utility: Sequence[str]) -> int:
    config = LayeredConfig()
    try:
        configure_app(config, flags, ConfigLoadRequest())
    except (ConfigParseError, FileNotFoundError) as e:
        logger.error("app.config_error error=%s", e)
        return 1
    init_logging(load_logging_settings(config))
    logger.debug("app.configured config_file=%s", config.config_file_used or "<none>")

    exit_code = await _run_utility(utility) if utility else 0

    services = enabled_services(config, flags)
    notification = _build_notification(config, utility, exit_code)
    results = await NotificationDispatcher().dispatch(services, notification, config)
    for result in results:
        if not result.ok:
            print(f"noti: {result.service}: {result.error}", file=sys.stderr)
    return exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    flags = new_flag_set()
    define_flags(flags)
    utility = flags.parse(sys.argv[1:] if argv is None else argv)

    version_flag = flags.lookup("version")
    if version_flag is not None and version_flag.value:
        print(f"noti version {__version__}")
        return 0

    try:
        return asyncio.run(_main_async(flags, utility))
    except KeyboardInterrupt:
        logger.info("app.interrupted_by_user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
