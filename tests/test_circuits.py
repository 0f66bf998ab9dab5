import pytest

from livewire_gpio.core.circuits import address_for, map_circuit
from livewire_gpio.core.model import GpioDirection, LcidTag


def test_circuit_table_matches_protocol() -> None:
    assert [map_circuit(c) for c in range(4, 9)] == [(n, GpioDirection.GPO) for n in (5, 4, 3, 2, 1)]
    assert [map_circuit(c) for c in range(9, 14)] == [(n, GpioDirection.GPI) for n in (5, 4, 3, 2, 1)]


def test_mapping_is_a_bijection() -> None:
    results = {map_circuit(c) for c in range(4, 14)}
    assert len(results) == 10
    assert results == {(n, d) for n in range(1, 6) for d in GpioDirection}


@pytest.mark.parametrize("circuit", [0, 1, 2, 3, 14, 15, 128, 255])
def test_out_of_range_circuit_is_unmapped(circuit: int) -> None:
    assert map_circuit(circuit) is None


def test_address_for_mapped_circuit() -> None:
    address = address_for(LcidTag(logic_port_id=18204, circuit=4))
    assert address.mapped
    assert address.direction is GpioDirection.GPO
    assert address.gpio_number == 5
    assert address.lookup_key == 182045
    assert str(address) == "GPO 18204.5"


def test_address_for_unmapped_circuit_renders_distinctly() -> None:
    address = address_for(LcidTag(logic_port_id=100, circuit=2))
    assert not address.mapped
    assert address.gpio_number is None
    assert address.lookup_key is None
    assert str(address) == "GPIO 100.? (circuit 2)"
