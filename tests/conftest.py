import threading
from pathlib import Path

import pytest

from warehousesim.core.clock import ScaledClock
from warehousesim.core.ids import CarrierName, GoodsName, ProducerName
from warehousesim.economy.goods import GoodsKind
from warehousesim.economy.ledger import ProductionLedger
from warehousesim.economy.production import ProducerSource
from warehousesim.logistics.carriers import CarrierKind
from warehousesim.logistics.shipping import ShipmentLog
from warehousesim.warehouse.buffer import SharedBuffer, UnitBatch


class FixedChoice:
    """Always picks the carrier at `index`; records how often it was asked."""

    def __init__(self, index: int = 0):
        self.index = index
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        return seq[self.index]


@pytest.fixture
def goods_a() -> GoodsKind:
    return GoodsKind(GoodsName("a"), 1.0, "Box 1")


@pytest.fixture
def goods_b() -> GoodsKind:
    return GoodsKind(GoodsName("b"), 1.2, "Box 2")


@pytest.fixture
def factory_a(goods_a) -> ProducerSource:
    return ProducerSource(ProducerName("A"), goods_a, 10.0)


@pytest.fixture
def factory_b(goods_b) -> ProducerSource:
    return ProducerSource(ProducerName("B"), goods_b, 10.0)


@pytest.fixture
def small_truck() -> CarrierKind:
    return CarrierKind(CarrierName("Small truck"), 4)


@pytest.fixture
def large_truck() -> CarrierKind:
    return CarrierKind(CarrierName("Large truck"), 100)


@pytest.fixture
def buffer() -> SharedBuffer:
    return SharedBuffer()


@pytest.fixture
def ledger() -> ProductionLedger:
    return ProductionLedger()


@pytest.fixture
def shipment_log() -> ShipmentLog:
    return ShipmentLog()


@pytest.fixture
def cancel() -> threading.Event:
    return threading.Event()


@pytest.fixture
def instant_clock() -> ScaledClock:
    return ScaledClock(0.0)


@pytest.fixture
def fill(buffer):
    """Pushes `n` units of a factory's goods into the shared buffer."""
    def _fill(source: ProducerSource, n: int):
        for _ in range(n):
            buffer.push(UnitBatch(source, source.goods))
    return _fill


@pytest.fixture
def scenario_yaml_path() -> Path:
    return Path(__file__).parent.parent / "data" / "scenario.yaml"
