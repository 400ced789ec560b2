import io
import os
import sys
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from noti import __version__
from noti.__main__ import main
from noti.core.models import DispatchResult
from noti.services import ServiceName

TESTDATA = Path(__file__).parent / "testdata"


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dispatch = mock.AsyncMock(return_value=[DispatchResult(service="slack", ok=True)])
        dispatcher_patch = mock.patch("noti.__main__.NotificationDispatcher")
        dispatcher_cls = dispatcher_patch.start()
        dispatcher_cls.return_value.dispatch = self.dispatch
        self.addCleanup(dispatcher_patch.stop)

        logging_patch = mock.patch("noti.__main__.init_logging")
        logging_patch.start()
        self.addCleanup(logging_patch.stop)

    def test_version(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(["--version"]), 0)
        self.assertIn(__version__, out.getvalue())
        self.dispatch.assert_not_awaited()

    def test_dispatches_to_flag_selected_service(self) -> None:
        code = main(["--no-dotenv", "--file", str(TESTDATA / "noti.yaml"), "--slack", "-m", "hello"])
        self.assertEqual(code, 0)
        services, notification, settings = self.dispatch.await_args.args
        self.assertEqual(services, {ServiceName.SLACK})
        self.assertEqual(notification.title, "noti")
        self.assertEqual(notification.message, "hello")
        self.assertFalse(notification.failed)
        self.assertEqual(settings.get_string("nsuser.soundName"), "testdata")

    def test_malformed_config_fails_before_dispatch(self) -> None:
        code = main(["--no-dotenv", "--file", str(TESTDATA / "malformed" / "noti.yaml"), "--slack"])
        self.assertEqual(code, 1)
        self.dispatch.assert_not_awaited()

    def test_utility_exit_status_is_returned(self) -> None:
        code = main(
            [
                "--no-dotenv",
                "--file",
                str(TESTDATA / "noti.yaml"),
                "--slack",
                sys.executable,
                "-c",
                "import sys; sys.exit(3)",
            ]
        )
        self.assertEqual(code, 3)
        _, notification, _ = self.dispatch.await_args.args
        self.assertTrue(notification.failed)
        self.assertEqual(notification.title, os.path.basename(sys.executable))


if __name__ == "__main__":
    unittest.main()
