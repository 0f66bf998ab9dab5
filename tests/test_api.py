from __future__ import annotations

from livewire_gpio.api import Client, NameTable, PacketProfile, Settings, Steady
from livewire_gpio.sinks.memory import MemorySink


def test_public_client_decode(make_packet) -> None:
    client = Client(settings=Settings(), names=NameTable(gpi={1005: "Mic Live"}))
    message = client.decode(make_packet(b"WRNI", circuit=9, value=0xC0))
    assert message.local_name == "Mic Live"
    assert isinstance(message.flag_state, Steady)
    assert client.decode_hex(make_packet().hex()) is not None


def test_public_client_decode_many_and_classify(make_packet) -> None:
    sink = MemorySink()
    client = Client(settings=Settings(), names=NameTable(), sink=sink)
    reports = client.decode_many([make_packet(), b"\x03\x00"])
    assert reports[0].applicable
    assert reports[1].error is not None

    info = client.classify("239.192.71.28", 5004, 56)
    assert info.packet_profile is PacketProfile.AES67_125US
    assert len(sink.results) == 2
    assert client.is_gpio_port(2060)
    assert client.settings.stream_port == 5004
