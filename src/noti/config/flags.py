from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

_TRUE_VALUES = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "f", "false", "n", "no", "off"})

UTILITY_DEST = "utility"


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass(slots=True)
class Flag:
    """
    One command-line flag.

    `value` is the resolved value (the declared default until the user supplies one).
    `changed` records whether the user explicitly supplied it on this invocation.
    """

    name: str
    kind: type
    default: Any
    help: str = ""
    shorthand: Optional[str] = None
    value: Any = None
    changed: bool = False

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = self.default


class FlagSet:
    def __init__(self, name: str, *, description: str = "") -> None:
        self.name = name
        self.description = description
        self._flags: dict[str, Flag] = {}

    def bool_flag(
        self,
        name: str,
        *,
        shorthand: Optional[str] = None,
        default: bool = False,
        help: str = "",
    ) -> Flag:
        return self._add(Flag(name=name, kind=bool, default=default, help=help, shorthand=shorthand))

    def string_flag(
        self,
        name: str,
        *,
        shorthand: Optional[str] = None,
        default: str = "",
        help: str = "",
    ) -> Flag:
        return self._add(Flag(name=name, kind=str, default=default, help=help, shorthand=shorthand))

    def _add(self, flag: Flag) -> Flag:
        if flag.name in self._flags:
            raise ValueError(f"Flag redefined: {flag.name}")
        if flag.name == UTILITY_DEST:
            raise ValueError(f"Reserved flag name: {flag.name}")
        self._flags[flag.name] = flag
        return flag

    def lookup(self, name: str) -> Optional[Flag]:
        return self._flags.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self) -> Iterator[Flag]:
        return iter(sorted(self._flags.values(), key=lambda f: f.name))

    def set(self, name: str, value: Any) -> None:
        """Set a flag as if the user had supplied it."""
        flag = self._flags.get(name)
        if flag is None:
            raise KeyError(f"Unknown flag: {name}")
        flag.value = parse_bool(value) if flag.kind is bool else str(value)
        flag.changed = True

    def changed_flags(self) -> list[Flag]:
        return [flag for flag in self if flag.changed]

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=self.name, description=self.description)
        for flag in self:
            opts = [f"--{flag.name}"]
            if flag.shorthand:
                opts.insert(0, f"-{flag.shorthand}")
            dest = _dest(flag.name)
            if flag.kind is bool:
                parser.add_argument(
                    *opts,
                    dest=dest,
                    action=argparse.BooleanOptionalAction,
                    default=argparse.SUPPRESS,
                    help=flag.help,
                )
            else:
                parser.add_argument(*opts, dest=dest, default=argparse.SUPPRESS, help=flag.help)
        parser.add_argument(
            UTILITY_DEST,
            nargs=argparse.REMAINDER,
            help="Utility to run, followed by its arguments",
        )
        return parser

    def parse(self, argv: Sequence[str]) -> list[str]:
        """Parse argv, mark supplied flags as changed, and return the utility argv."""
        namespace = self.build_parser().parse_args(list(argv))
        values = vars(namespace)
        for flag in self._flags.values():
            dest = _dest(flag.name)
            if dest in values:
                self.set(flag.name, values[dest])
        utility = list(values.get(UTILITY_DEST) or [])
        if utility and utility[0] == "--":
            utility = utility[1:]
        return utility


def _dest(name: str) -> str:
    return name.replace("-", "_")
