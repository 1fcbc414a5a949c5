from dataclasses import dataclass

from ..core.ids import CarrierName


@dataclass(frozen=True)
class CarrierKind:
    name: CarrierName
    capacity: int  # units of goods, regardless of weight

    def __str__(self) -> str:
        return f"{self.name} (capacity: {self.capacity} units)"
