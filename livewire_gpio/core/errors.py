"""Domain-specific errors for livewire-gpio."""


class LivewireError(Exception):
    """Base error for livewire-gpio."""


class TruncatedPacketError(LivewireError):
    """Raised when a packet ends before a field that has to be read."""

    def __init__(self, offset: int, needed: int, length: int) -> None:
        super().__init__(
            f"Packet truncated: need {needed} byte(s) at offset {offset}, packet is {length} byte(s)"
        )
        self.offset = offset
        self.needed = needed
        self.length = length


class PayloadFormatError(LivewireError):
    """Raised when a textual payload is not valid hex."""


class NameTableLoadError(LivewireError):
    """Raised when the local name table cannot be read."""


class NameTableValidationError(LivewireError):
    """Raised when the local name table does not conform to schema."""


class ConfigLoadError(LivewireError):
    """Raised when the settings file cannot be read."""


class ConfigValidationError(LivewireError):
    """Raised when the settings file does not conform to schema or semantics."""
