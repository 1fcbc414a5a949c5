from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping

from ..core.ids import GoodsName
from .carriers import CarrierKind


@dataclass(frozen=True)
class Shipment:
    carrier: CarrierKind
    loads: Mapping[GoodsName, int]  # loaded units per goods kind, zero entries included
    returned: Mapping[GoodsName, int] = field(default_factory=dict)  # overflow put back into the warehouse

    def __post_init__(self):
        # Read-only views so a recorded shipment cannot be edited afterwards.
        object.__setattr__(self, "loads", MappingProxyType(dict(self.loads)))
        object.__setattr__(self, "returned", MappingProxyType(dict(self.returned)))

    @property
    def total_loaded(self) -> int:
        return sum(self.loads.values())

    @property
    def total_returned(self) -> int:
        return sum(self.returned.values())


class ShipmentLog:
    """Append-only list of shipments. Only the warehouse monitor writes to it."""

    def __init__(self):
        self._shipments: List[Shipment] = []

    def record(self, shipment: Shipment):
        self._shipments.append(shipment)

    @property
    def shipments(self) -> List[Shipment]:
        return list(self._shipments)

    def __len__(self) -> int:
        return len(self._shipments)

    def __iter__(self) -> Iterator[Shipment]:
        return iter(list(self._shipments))
