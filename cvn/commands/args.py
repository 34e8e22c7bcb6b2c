"""Minimal switch/operand splitting shared by the simulated commands."""

from __future__ import annotations

from collections.abc import Sequence

END_OF_SWITCHES = "--"


def is_switch(token: str) -> bool:
    return token.startswith("-") and token != "-" and token != END_OF_SWITCHES


def split_switches(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split leading ``-`` switches from operands.

    Collection stops at a literal ``--`` (which is dropped) or at the first
    token that is not a switch.
    """
    switches: list[str] = []
    index = 0
    while index < len(args):
        token = args[index]
        if token == END_OF_SWITCHES:
            index += 1
            break
        if not is_switch(token):
            break
        switches.append(token)
        index += 1
    return switches, list(args[index:])


__all__ = ["END_OF_SWITCHES", "is_switch", "split_switches"]
