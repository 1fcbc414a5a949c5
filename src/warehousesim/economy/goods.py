from dataclasses import dataclass

from ..core.ids import GoodsName


@dataclass(frozen=True)
class GoodsKind:
    name: GoodsName
    weight: float  # kg per unit
    package_type: str

    def __str__(self) -> str:
        return f"{self.name} ({self.weight} kg, {self.package_type})"
