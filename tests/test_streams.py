from ipaddress import IPv4Address

import pytest

from livewire_gpio.core.model import PacketProfile
from livewire_gpio.core.streams import classify_stream, stream_address_for_lpid


def test_aes67_stream_classified() -> None:
    info = classify_stream("239.192.71.28", 5004, 308)
    assert info is not None
    assert info.channel_number == 18204
    assert info.packet_profile is PacketProfile.AES67_1MS
    assert info.packet_profile.label == "AES67 (48 samples, 1 ms)"
    assert info.destination == IPv4Address("239.192.71.28")


def test_wrong_port_not_applicable() -> None:
    assert classify_stream("239.192.71.28", 5005, 308) is None


@pytest.mark.parametrize("address", ["239.194.0.1", "238.192.0.1", "10.0.0.1", "239.191.255.255"])
def test_outside_livewire_range_not_applicable(address: str) -> None:
    assert classify_stream(address, 5004, 308) is None


def test_second_multicast_block_accepted() -> None:
    info = classify_stream(IPv4Address("239.193.1.2"), 5004, 1460)
    assert info is not None
    assert info.channel_number == 258
    assert info.packet_profile.label == "Standard Stream (240 samples, 5 ms)"


@pytest.mark.parametrize(
    ("length", "label"),
    [
        (56, "AES67 (6 samples, 125 us)"),
        (92, "Livestream (12 samples, 250 us)"),
        (740, "Standard Stream (120 samples, 2.5 ms)"),
        (0, "Unknown"),
        (309, "Unknown"),
    ],
)
def test_packet_profile_by_exact_length(length: int, label: str) -> None:
    info = classify_stream("239.192.0.1", 5004, length)
    assert info is not None
    assert info.packet_profile.label == label


def test_custom_stream_port() -> None:
    assert classify_stream("239.192.0.1", 6000, 308, stream_port=6000) is not None
    assert classify_stream("239.192.0.1", 5004, 308, stream_port=6000) is None


def test_stream_address_for_lpid() -> None:
    assert stream_address_for_lpid(18204) == IPv4Address("239.192.71.28")
    assert classify_stream(stream_address_for_lpid(100), 5004, 308).channel_number == 100


@pytest.mark.parametrize("lpid", [-1, 65536])
def test_stream_address_rejects_out_of_range(lpid: int) -> None:
    with pytest.raises(ValueError):
        stream_address_for_lpid(lpid)
