import unittest

from noti.config.flags import FlagSet, parse_bool
from noti.flag_definitions import define_flags, new_flag_set
from noti.services import ServiceName


class FlagSetTests(unittest.TestCase):
    def setUp(self) -> None:
        self.flags = new_flag_set("test")
        define_flags(self.flags)

    def test_defines_one_flag_per_service(self) -> None:
        for service in ServiceName:
            flag = self.flags.lookup(service.value)
            self.assertIsNotNone(flag)
            self.assertIs(flag.kind, bool)
            self.assertFalse(flag.value)
            self.assertFalse(flag.changed)

    def test_parse_marks_only_supplied_flags(self) -> None:
        utility = self.flags.parse(["--slack", "-t", "build", "make", "-j4"])
        self.assertEqual(utility, ["make", "-j4"])
        self.assertTrue(self.flags.lookup("slack").changed)
        self.assertTrue(self.flags.lookup("slack").value)
        self.assertEqual(self.flags.lookup("title").value, "build")
        self.assertEqual([f.name for f in self.flags.changed_flags()], ["slack", "title"])

    def test_parse_explicit_false(self) -> None:
        self.flags.parse(["--no-banner"])
        flag = self.flags.lookup("banner")
        self.assertTrue(flag.changed)
        self.assertFalse(flag.value)

    def test_parse_shorthand(self) -> None:
        self.flags.parse(["-k", "-v"])
        self.assertTrue(self.flags.lookup("slack").value)
        self.assertTrue(self.flags.lookup("verbose").value)

    def test_flags_after_utility_belong_to_utility(self) -> None:
        utility = self.flags.parse(["ls", "--slack"])
        self.assertEqual(utility, ["ls", "--slack"])
        self.assertFalse(self.flags.lookup("slack").changed)

    def test_separator_before_utility_is_dropped(self) -> None:
        utility = self.flags.parse(["-v", "--", "ls", "-k"])
        self.assertEqual(utility, ["ls", "-k"])
        self.assertTrue(self.flags.lookup("verbose").value)
        self.assertFalse(self.flags.lookup("slack").changed)

    def test_set_converts_booleans(self) -> None:
        self.flags.set("slack", "true")
        self.assertIs(self.flags.lookup("slack").value, True)
        self.flags.set("slack", "false")
        self.assertIs(self.flags.lookup("slack").value, False)
        self.assertTrue(self.flags.lookup("slack").changed)

    def test_set_unknown_flag(self) -> None:
        with self.assertRaises(KeyError):
            self.flags.set("nope", "true")

    def test_set_invalid_boolean(self) -> None:
        with self.assertRaises(ValueError):
            self.flags.set("slack", "maybe")

    def test_redefinition_is_rejected(self) -> None:
        flags = FlagSet("test")
        flags.bool_flag("verbose")
        with self.assertRaises(ValueError):
            flags.bool_flag("verbose")

    def test_parse_bool(self) -> None:
        self.assertTrue(parse_bool("Yes"))
        self.assertFalse(parse_bool("0"))
        self.assertTrue(parse_bool(True))


if __name__ == "__main__":
    unittest.main()
