import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from ..core.ids import GoodsName
from ..core.rng import ChoiceSource
from ..warehouse.buffer import SharedBuffer, UnitBatch
from .carriers import CarrierKind
from .shipping import Shipment, ShipmentLog

logger = logging.getLogger(__name__)


class DrainLoader:
    """
    Empties the warehouse onto a single randomly chosen truck.

    Goods are loaded kind by kind in ascending name order until the truck is
    full; whatever does not fit goes back into the warehouse unit for unit.
    """

    def __init__(self, fleet: Sequence[CarrierKind], rng: ChoiceSource, shipment_log: ShipmentLog):
        if not fleet:
            raise ValueError("DrainLoader needs at least one carrier.")
        self.fleet = tuple(fleet)
        self.rng = rng
        self.shipment_log = shipment_log

    def unload(self, buffer: SharedBuffer) -> Optional[Shipment]:
        """
        Drains the buffer and loads one truck. Returns the recorded Shipment,
        or None if the warehouse was empty.
        """
        drained = buffer.drain_all()
        if not drained:
            logger.info("Nothing in the warehouse to ship.")
            return None

        carrier = self.rng.choice(self.fleet)
        logger.info("%s arrived.", carrier)

        shipment, leftovers = self.load(carrier, drained)
        buffer.restore(leftovers)
        self.shipment_log.record(shipment)

        for goods_name, qty in shipment.loads.items():
            logger.info("  %s loaded: %s - %d units", carrier.name, goods_name, qty)
        if shipment.returned:
            logger.info("  %d units returned to the warehouse.", shipment.total_returned)
        return shipment

    @staticmethod
    def load(carrier: CarrierKind, batches: List[UnitBatch]):
        """
        Packs batches onto one carrier. Returns (shipment, leftover batches);
        leftovers are the original batch objects that did not fit.
        """
        groups: Dict[GoodsName, List[UnitBatch]] = defaultdict(list)
        for batch in batches:
            groups[batch.goods.name].append(batch)

        remaining_capacity = carrier.capacity
        loads: Dict[GoodsName, int] = {}
        returned: Dict[GoodsName, int] = {}
        leftovers: List[UnitBatch] = []

        for goods_name in sorted(groups):
            group = groups[goods_name]
            group_total = len(group)
            load_count = min(remaining_capacity, group_total)

            loads[goods_name] = load_count
            remaining_capacity -= load_count

            if load_count < group_total:
                returned[goods_name] = group_total - load_count
                leftovers.extend(group[load_count:])

        return Shipment(carrier=carrier, loads=loads, returned=returned), leftovers

