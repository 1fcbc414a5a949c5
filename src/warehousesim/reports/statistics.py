from collections import defaultdict
from typing import Dict, List, Tuple

from ..core.ids import GoodsName
from ..economy.ledger import ProductionLedger
from ..logistics.shipping import ShipmentLog


class StatisticsCollector:
    def __init__(self, shipment_log: ShipmentLog, ledger: ProductionLedger):
        self.shipment_log = shipment_log
        self.ledger = ledger

    def average_loads(self) -> List[Tuple[GoodsName, float]]:
        """
        Average units per truck for every goods kind seen in any shipment,
        sorted by goods name.

        The denominator is the total number of shipments, so a kind that rode
        on only some trucks averages lower than its per-truck load.
        """
        shipments = self.shipment_log.shipments
        if not shipments:
            return []

        totals: Dict[GoodsName, int] = defaultdict(int)
        for shipment in shipments:
            for goods_name, qty in shipment.loads.items():
                totals[goods_name] += qty

        return [(name, totals[name] / len(shipments)) for name in sorted(totals)]

    def production_totals(self) -> List[Tuple[GoodsName, int]]:
        produced = self.ledger.to_dict()
        return [(name, produced[name]) for name in sorted(produced)]

    def render(self) -> str:
        lines = ["----- Shipping statistics -----"]
        averages = self.average_loads()
        if not averages:
            lines.append("No shipments took place.")
        for goods_name, avg in averages:
            lines.append(f"- On average trucks carry: {goods_name} - {avg:.2f} units")

        lines.append("")
        lines.append("----- Total production -----")
        for goods_name, qty in self.production_totals():
            lines.append(f"- {goods_name}: {qty} units")
        return "\n".join(lines) + "\n"
