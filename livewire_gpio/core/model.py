"""Core data models shared by the decoders, service, sinks and CLI."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from ipaddress import IPv4Address


class MessageKind(enum.Enum):
    WRITE_NO_INDICATE = "WRNI"
    WRITE_INDICATE = "WRIN"
    READ = "READ"
    INDICATE = "INDI"
    STATUS = "STAT"
    NEST = "NEST"
    UNKNOWN = "????"

    @classmethod
    def from_code(cls, code: bytes) -> MessageKind:
        try:
            return cls(code.decode("ascii"))
        except (UnicodeDecodeError, ValueError):
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return _MESSAGE_LABELS[self]

    @property
    def details(self) -> str:
        return _MESSAGE_DETAILS[self]


_MESSAGE_LABELS = {
    MessageKind.WRITE_NO_INDICATE: "Write",
    MessageKind.WRITE_INDICATE: "Write",
    MessageKind.READ: "Read",
    MessageKind.INDICATE: "Indicate",
    MessageKind.STATUS: "Status",
    MessageKind.NEST: "Nest Container",
    MessageKind.UNKNOWN: "Unknown",
}

_MESSAGE_DETAILS = {
    MessageKind.WRITE_NO_INDICATE: "Write value - returning the value indication is not requested",
    MessageKind.WRITE_INDICATE: "Write value - returning the value indication is requested",
    MessageKind.READ: "Read value",
    MessageKind.INDICATE: "Value indication",
    MessageKind.STATUS: "Status indication",
    MessageKind.NEST: "No operation - container for nested messages",
    MessageKind.UNKNOWN: "Unrecognised message id",
}


class DataType(enum.IntEnum):
    UNKNOWN = 0
    DWORD = 1
    STRING = 2
    BYTE_ARRAY = 3
    WORD_ARRAY = 4
    DWORD_ARRAY = 5
    MSG = 6
    BYTE = 7
    WORD = 8
    QWORD = 9
    QWORD_ARRAY = 10

    @classmethod
    def from_code(cls, code: int) -> DataType:
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return _DATA_TYPE_LABELS[self]

    @property
    def fixed_width(self) -> int | None:
        """Value width implied by the type, or None when a length field follows."""
        return _FIXED_WIDTHS.get(self)


_DATA_TYPE_LABELS = {
    DataType.UNKNOWN: "Unknown",
    DataType.DWORD: "Dword",
    DataType.STRING: "String",
    DataType.BYTE_ARRAY: "ByteArray",
    DataType.WORD_ARRAY: "WordArray",
    DataType.DWORD_ARRAY: "DwordArray",
    DataType.MSG: "Msg",
    DataType.BYTE: "Byte",
    DataType.WORD: "Word",
    DataType.QWORD: "Qword",
    DataType.QWORD_ARRAY: "QwordArray",
}

_FIXED_WIDTHS = {
    DataType.BYTE: 1,
    DataType.WORD: 2,
    DataType.DWORD: 4,
    DataType.QWORD: 8,
}


class GpioDirection(enum.Enum):
    GPI = "GPI"
    GPO = "GPO"


class Level(enum.Enum):
    HIGH = "High"
    LOW = "Low"


class PulseResolution(enum.IntEnum):
    """Tick length of a pulse duration, in milliseconds."""

    FINE = 10
    COARSE = 250


class TagKind(enum.Enum):
    LCID = "LCID"
    GAIN = "GAIN"
    MUTE = "MUTE"
    MESSAGE_CLASS = "MESSAGE_CLASS"
    RAW = "RAW"


class MessageClass(enum.IntEnum):
    COMMAND = 1
    RESPONSE = 2


class PacketProfile(enum.IntEnum):
    UNKNOWN = 0
    AES67_125US = 56
    LIVESTREAM_250US = 92
    AES67_1MS = 308
    STANDARD_2500US = 740
    STANDARD_5MS = 1460

    @classmethod
    def from_length(cls, udp_length: int) -> PacketProfile:
        try:
            return cls(udp_length)
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return _PROFILE_LABELS[self]


_PROFILE_LABELS = {
    PacketProfile.UNKNOWN: "Unknown",
    PacketProfile.AES67_125US: "AES67 (6 samples, 125 us)",
    PacketProfile.LIVESTREAM_250US: "Livestream (12 samples, 250 us)",
    PacketProfile.AES67_1MS: "AES67 (48 samples, 1 ms)",
    PacketProfile.STANDARD_2500US: "Standard Stream (120 samples, 2.5 ms)",
    PacketProfile.STANDARD_5MS: "Standard Stream (240 samples, 5 ms)",
}


@dataclass(frozen=True)
class Steady:
    level: Level


@dataclass(frozen=True)
class Pulse:
    level: Level
    ticks: int
    resolution: PulseResolution

    @property
    def duration_s(self) -> float:
        return self.ticks * int(self.resolution) / 1000


@dataclass(frozen=True)
class Indeterminate:
    pass


GpioFlagState = Steady | Pulse | Indeterminate


@dataclass(frozen=True)
class LcidTag:
    logic_port_id: int
    circuit: int


@dataclass(frozen=True)
class ItemTag:
    raw: int
    kind: TagKind
    lcid: LcidTag | None = None


@dataclass(frozen=True)
class Item:
    tag: ItemTag
    data_type: DataType
    data_type_code: int
    value_bytes: bytes
    offset: int
    size: int
    length: int | None = None

    @property
    def value(self) -> int:
        return int.from_bytes(self.value_bytes, "big")

    @property
    def flag_byte(self) -> int | None:
        return self.value_bytes[-1] if self.value_bytes else None

    @property
    def gain_db(self) -> float | None:
        if self.tag.kind is not TagKind.GAIN or not self.value_bytes:
            return None
        # Narrower values are zero-extended to 16 bits before the sign is applied.
        raw = int.from_bytes(self.value_bytes[-2:], "big")
        if raw & 0x8000:
            raw -= 0x10000
        return raw / 10

    @property
    def muted(self) -> bool | None:
        if self.tag.kind is not TagKind.MUTE or not self.value_bytes:
            return None
        return self.value == 0

    @property
    def message_class(self) -> MessageClass | None:
        if self.tag.kind is not TagKind.MESSAGE_CLASS:
            return None
        try:
            return MessageClass(self.value)
        except ValueError:
            return None


@dataclass(frozen=True)
class MessageHeader:
    preamble_valid: bool
    message_kind: MessageKind
    message_code: bytes
    item_count: int


@dataclass(frozen=True)
class GpioAddress:
    logic_port_id: int
    circuit: int
    gpio_number: int | None
    direction: GpioDirection | None

    @property
    def mapped(self) -> bool:
        return self.gpio_number is not None

    @property
    def lookup_key(self) -> int | None:
        if self.gpio_number is None:
            return None
        return self.logic_port_id * 10 + self.gpio_number

    def __str__(self) -> str:
        if self.direction is None:
            return f"GPIO {self.logic_port_id}.? (circuit {self.circuit})"
        return f"{self.direction.value} {self.logic_port_id}.{self.gpio_number}"


@dataclass(frozen=True)
class DecodedMessage:
    header: MessageHeader
    item: Item
    address: GpioAddress | None = None
    flag_state: GpioFlagState | None = None
    second_item: Item | None = None
    local_name: str | None = None


@dataclass(frozen=True)
class ChannelInfo:
    destination: IPv4Address
    channel_number: int
    packet_profile: PacketProfile
    udp_length: int
