import random

import pytest

from warehousesim.logistics.loader import DrainLoader
from warehousesim.warehouse.buffer import UnitBatch
from conftest import FixedChoice


def test_empty_drain_records_nothing(buffer, shipment_log, ledger, small_truck):
    rng = FixedChoice()
    loader = DrainLoader([small_truck], rng, shipment_log)

    assert loader.unload(buffer) is None
    assert len(shipment_log) == 0
    assert rng.calls == 0
    assert ledger.to_dict() == {}


def test_everything_fits(buffer, shipment_log, factory_a, factory_b, large_truck, fill):
    fill(factory_a, 10)
    fill(factory_b, 5)
    loader = DrainLoader([large_truck], FixedChoice(), shipment_log)

    shipment = loader.unload(buffer)

    assert shipment.carrier == large_truck
    assert dict(shipment.loads) == {"a": 10, "b": 5}
    assert dict(shipment.returned) == {}
    assert buffer.count() == 0
    assert shipment_log.shipments == [shipment]


def test_overflow_goes_back_to_buffer(buffer, shipment_log, factory_a, factory_b, small_truck, fill):
    fill(factory_b, 3)
    fill(factory_a, 3)
    loader = DrainLoader([small_truck], FixedChoice(), shipment_log)

    shipment = loader.unload(buffer)

    # Loaded in name order: all of "a", then one "b".
    assert dict(shipment.loads) == {"a": 3, "b": 1}
    assert dict(shipment.returned) == {"b": 2}
    assert shipment.total_loaded == small_truck.capacity
    assert buffer.counts_by_goods() == {"b": 2}


def test_full_truck_returns_later_groups_whole(buffer, shipment_log, factory_a, factory_b, small_truck, fill):
    fill(factory_a, 6)
    fill(factory_b, 5)
    loader = DrainLoader([small_truck], FixedChoice(), shipment_log)

    shipment = loader.unload(buffer)

    assert dict(shipment.loads) == {"a": 4, "b": 0}
    assert dict(shipment.returned) == {"a": 2, "b": 5}
    assert buffer.counts_by_goods() == {"a": 2, "b": 5}


def test_overflow_is_conserved(buffer, shipment_log, factory_a, factory_b, small_truck, fill):
    fill(factory_a, 9)
    fill(factory_b, 4)
    drained_total = buffer.count()
    loader = DrainLoader([small_truck], FixedChoice(), shipment_log)

    shipment = loader.unload(buffer)

    excess = drained_total - small_truck.capacity
    assert shipment.total_returned == excess
    assert buffer.count() == excess


def test_returned_units_are_the_original_batches(buffer, shipment_log, factory_a, small_truck):
    batches = [UnitBatch(factory_a, factory_a.goods) for _ in range(6)]
    for b in batches:
        buffer.push(b)

    DrainLoader([small_truck], FixedChoice(), shipment_log).unload(buffer)

    remaining = buffer.drain_all()
    assert len(remaining) == 2
    assert all(any(r is b for b in batches) for r in remaining)


def test_load_without_buffer(factory_a, factory_b, small_truck):
    batches = [UnitBatch(factory_b, factory_b.goods) for _ in range(2)]
    batches += [UnitBatch(factory_a, factory_a.goods) for _ in range(3)]

    shipment, leftovers = DrainLoader.load(small_truck, batches)

    assert dict(shipment.loads) == {"a": 3, "b": 1}
    assert leftovers == [batches[1]]


def test_carrier_chosen_by_rng(buffer, shipment_log, factory_a, small_truck, large_truck, fill):
    fill(factory_a, 5)
    loader = DrainLoader([small_truck, large_truck], FixedChoice(1), shipment_log)
    assert loader.unload(buffer).carrier == large_truck


def test_seeded_rng_is_reproducible(factory_a, small_truck, large_truck, fill, buffer):
    def carriers(seed):
        from warehousesim.logistics.shipping import ShipmentLog
        log = ShipmentLog()
        loader = DrainLoader([small_truck, large_truck], random.Random(seed), log)
        picked = []
        for _ in range(10):
            fill(factory_a, 3)
            picked.append(loader.unload(buffer).carrier.name)
        return picked

    assert carriers(7) == carriers(7)


def test_shipment_is_read_only(buffer, shipment_log, factory_a, large_truck, fill):
    fill(factory_a, 2)
    shipment = DrainLoader([large_truck], FixedChoice(), shipment_log).unload(buffer)
    with pytest.raises(TypeError):
        shipment.loads["a"] = 99


def test_empty_fleet_rejected(shipment_log):
    with pytest.raises(ValueError):
        DrainLoader([], FixedChoice(), shipment_log)
