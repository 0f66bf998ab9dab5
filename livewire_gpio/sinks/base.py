"""Report sink interfaces."""

from __future__ import annotations

from typing import Protocol

from livewire_gpio.core.model import ChannelInfo, DecodedMessage


class ReportSink(Protocol):
    def emit(self, result: DecodedMessage | ChannelInfo) -> None:
        """Consume one decoded result."""
