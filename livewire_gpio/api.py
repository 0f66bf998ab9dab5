"""Stable public API for building tooling on top of livewire-gpio.

This module is the supported integration surface for third-party callers
(capture tools, monitoring services, scripts). Avoid importing from the
internal modules unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from collections.abc import Iterable
from ipaddress import IPv4Address

from livewire_gpio.core.errors import (
    ConfigLoadError,
    ConfigValidationError,
    LivewireError,
    NameTableLoadError,
    NameTableValidationError,
    PayloadFormatError,
    TruncatedPacketError,
)
from livewire_gpio.core.model import (
    ChannelInfo,
    DataType,
    DecodedMessage,
    GpioAddress,
    GpioDirection,
    GpioFlagState,
    Indeterminate,
    Item,
    ItemTag,
    LcidTag,
    Level,
    MessageClass,
    MessageHeader,
    MessageKind,
    PacketProfile,
    Pulse,
    PulseResolution,
    Steady,
    TagKind,
)
from livewire_gpio.core.names import NameResolver, NameTable
from livewire_gpio.core.service import LivewireService, PacketReport
from livewire_gpio.core.settings import Settings
from livewire_gpio.sinks.base import ReportSink

__all__ = [
    "LivewireError",
    "TruncatedPacketError",
    "PayloadFormatError",
    "NameTableLoadError",
    "NameTableValidationError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ChannelInfo",
    "DataType",
    "DecodedMessage",
    "GpioAddress",
    "GpioDirection",
    "GpioFlagState",
    "Indeterminate",
    "Item",
    "ItemTag",
    "LcidTag",
    "Level",
    "MessageClass",
    "MessageHeader",
    "MessageKind",
    "PacketProfile",
    "Pulse",
    "PulseResolution",
    "Steady",
    "TagKind",
    "NameResolver",
    "NameTable",
    "PacketReport",
    "ReportSink",
    "Settings",
    "Client",
]


class Client:
    """Public client for decoding Livewire traffic.

    A `Client` loads settings and the local name table once and then decodes
    any number of packets. Instances hold no per-packet state and can be
    shared between threads.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        names: NameResolver | None = None,
        sink: ReportSink | None = None,
    ) -> None:
        self._service = LivewireService(settings=settings, names=names, sink=sink)

    @property
    def settings(self) -> Settings:
        return self._service.settings

    def decode(self, payload: bytes) -> DecodedMessage | None:
        return self._service.decode(payload)

    def decode_hex(self, text: str) -> DecodedMessage | None:
        return self._service.decode_hex(text)

    def decode_many(self, payloads: Iterable[bytes | str]) -> list[PacketReport]:
        return self._service.decode_many(payloads)

    def classify(
        self,
        dest_ip: str | IPv4Address,
        dest_port: int,
        udp_length: int,
    ) -> ChannelInfo | None:
        return self._service.classify(dest_ip, dest_port, udp_length)

    def is_gpio_port(self, port: int) -> bool:
        return self._service.is_gpio_port(port)
