import unittest
from pathlib import Path

from noti.config import ConfigLoadRequest, LayeredConfig, configure_app
from noti.flag_definitions import define_flags, new_flag_set
from noti.services import ServiceName, enabled_services, parse_service_names

TESTDATA = Path(__file__).parent / "testdata"


class EnabledServicesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.environ: dict[str, str] = {}
        self.config = LayeredConfig(environ=self.environ)
        self.flags = new_flag_set("testenabledservices")
        define_flags(self.flags)
        configure_app(
            self.config,
            self.flags,
            ConfigLoadRequest(search_paths=(str(TESTDATA),), dotenv_path=None),
        )

    def test_flag_override(self) -> None:
        self.flags.set("slack", "true")
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.SLACK})

    def test_multiple_flags(self) -> None:
        self.flags.set("slack", True)
        self.flags.set("pushbullet", True)
        self.assertEqual(
            enabled_services(self.config, self.flags),
            {ServiceName.SLACK, ServiceName.PUSHBULLET},
        )

    def test_non_service_flags(self) -> None:
        self.flags.set("verbose", "true")
        self.flags.set("title", "build")
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.BANNER})

    def test_env_override(self) -> None:
        self.environ["NOTI_DEFAULT"] = "slack"
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.SLACK})

    def test_env_override_deduplicates(self) -> None:
        self.environ["NOTI_DEFAULT"] = "slack speech slack"
        self.assertEqual(
            enabled_services(self.config, self.flags),
            {ServiceName.SLACK, ServiceName.SPEECH},
        )

    def test_defaults(self) -> None:
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.BANNER})

    def test_flag_beats_env(self) -> None:
        self.environ["NOTI_DEFAULT"] = "speech"
        self.flags.set("slack", True)
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.SLACK})

    def test_false_only_flag_falls_through(self) -> None:
        self.flags.set("banner", False)
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.BANNER})

        self.environ["NOTI_DEFAULT"] = "pushover"
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.PUSHOVER})

    def test_file_override(self) -> None:
        self.config.read_config("defaults: [pushover, speech]\n")
        self.assertEqual(
            enabled_services(self.config, self.flags),
            {ServiceName.PUSHOVER, ServiceName.SPEECH},
        )

    def test_env_beats_file(self) -> None:
        self.config.read_config("defaults: [pushover, speech]\n")
        self.environ["NOTI_DEFAULT"] = "simplepush"
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.SIMPLEPUSH})

    def test_empty_file_list_uses_builtin_default(self) -> None:
        self.config.read_config("defaults: []\n")
        self.assertEqual(enabled_services(self.config, self.flags), {ServiceName.BANNER})

    def test_unknown_services_are_skipped(self) -> None:
        self.environ["NOTI_DEFAULT"] = "carrier-pigeon"
        with self.assertLogs("noti.services", level="WARNING"):
            services = enabled_services(self.config, self.flags)
        self.assertEqual(services, {ServiceName.BANNER})


class ParseServiceNamesTests(unittest.TestCase):
    def test_is_case_insensitive(self) -> None:
        self.assertEqual(parse_service_names(["Slack", " BANNER "]), {ServiceName.SLACK, ServiceName.BANNER})

    def test_service_names_compare_as_strings(self) -> None:
        self.assertIn("slack", parse_service_names(["slack"]))


if __name__ == "__main__":
    unittest.main()
