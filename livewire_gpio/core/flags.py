"""Decoding of the GPIO value byte.

One byte carries either a steady level or a timed pulse, and pulses come in
two resolutions selected by bit 7::

    0000 0000  Low         (steady)
    000x xxxx  Pulse Low   (x * 250 ms)
    0100 0000  High        (steady)
    010x xxxx  Pulse High  (x * 250 ms)
    1000 0000  Low         (steady)
    10xx xxxx  Pulse Low   (x * 10 ms)
    1100 0000  High        (steady)
    11xx xxxx  Pulse High  (x * 10 ms)

Bytes with bit 7 clear and bit 5 set are not assigned by the protocol and
decode as indeterminate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from livewire_gpio.core.model import (
    GpioFlagState,
    Indeterminate,
    Level,
    MessageKind,
    Pulse,
    PulseResolution,
    Steady,
)

_BIT7 = 0x80
_BIT6 = 0x40
_BIT5 = 0x20
_FINE_TICKS = 0x3F
_COARSE_TICKS = 0x1F
_STEADY_VALUES = frozenset({0x00, 0x40, 0x80, 0xC0})


def _level(value: int) -> Level:
    return Level.HIGH if value & _BIT6 else Level.LOW


@dataclass(frozen=True)
class FlagRule:
    name: str
    matches: Callable[[int, MessageKind], bool]
    decode: Callable[[int], GpioFlagState]


FLAG_RULES: tuple[FlagRule, ...] = (
    FlagRule(
        name="read-request",
        matches=lambda value, kind: kind is MessageKind.READ,
        decode=lambda value: Indeterminate(),
    ),
    FlagRule(
        name="indication",
        matches=lambda value, kind: kind is MessageKind.INDICATE,
        decode=lambda value: Steady(Level.HIGH if value else Level.LOW),
    ),
    FlagRule(
        name="steady",
        matches=lambda value, kind: value in _STEADY_VALUES,
        decode=lambda value: Steady(_level(value)),
    ),
    FlagRule(
        name="fine-pulse",
        matches=lambda value, kind: bool(value & _BIT7),
        decode=lambda value: Pulse(_level(value), value & _FINE_TICKS, PulseResolution.FINE),
    ),
    FlagRule(
        name="coarse-pulse",
        matches=lambda value, kind: not value & _BIT5,
        decode=lambda value: Pulse(_level(value), value & _COARSE_TICKS, PulseResolution.COARSE),
    ),
    FlagRule(
        name="unassigned",
        matches=lambda value, kind: True,
        decode=lambda value: Indeterminate(),
    ),
)


def match_rule(value: int, message_kind: MessageKind) -> FlagRule:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"GPIO value byte out of range: {value}")
    for rule in FLAG_RULES:
        if rule.matches(value, message_kind):
            return rule
    raise AssertionError("FLAG_RULES must end with a catch-all rule")


def decode_flags(value: int, message_kind: MessageKind) -> GpioFlagState:
    return match_rule(value, message_kind).decode(value)


def describe_flags(state: GpioFlagState, message_kind: MessageKind) -> str:
    """Human readable state, e.g. ``Pulse High - 0.25 seconds``."""
    if isinstance(state, Pulse):
        return f"Pulse {state.level.value} - {state.duration_s:g} seconds"
    if isinstance(state, Steady):
        if message_kind is MessageKind.INDICATE:
            return "Active" if state.level is Level.HIGH else "Inactive"
        return state.level.value
    if message_kind is MessageKind.READ:
        return ""
    return "TBD"
