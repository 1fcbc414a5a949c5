from dataclasses import dataclass
from typing import Optional, Tuple

from ..economy.production import ProducerSource
from ..logistics.carriers import CarrierKind


class InvalidConfiguration(Exception):
    """Raised before a run starts when the simulation parameters cannot work."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    producers: Tuple[ProducerSource, ...]
    fleet: Tuple[CarrierKind, ...]
    capacity_multiplier: float = 100.0  # warehouse holds this many ticks of total production
    threshold: float = 0.95  # fill ratio that triggers unloading
    ticks: int = 100
    tick_interval: float = 1.0  # seconds per production tick, shared by all factories
    poll_interval: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "producers", tuple(self.producers))
        object.__setattr__(self, "fleet", tuple(self.fleet))

    @property
    def total_production_rate(self) -> float:
        return sum(p.production_rate for p in self.producers)

    @property
    def warehouse_capacity(self) -> int:
        return int(self.capacity_multiplier * self.total_production_rate)

    @property
    def pacing_delay(self) -> float:
        """Delay each factory takes between ticks."""
        if not self.producers:
            return self.tick_interval
        return self.tick_interval / len(self.producers)

    def validate(self):
        if not self.producers:
            raise InvalidConfiguration("At least one factory is required.")
        if not self.fleet:
            raise InvalidConfiguration("The truck fleet is empty.")
        for carrier in self.fleet:
            if carrier.capacity <= 0:
                raise InvalidConfiguration(f"Truck '{carrier.name}' has non-positive capacity {carrier.capacity}.")
        if self.ticks <= 0:
            raise InvalidConfiguration(f"Tick count must be positive, got {self.ticks}.")
        if self.warehouse_capacity <= 0:
            raise InvalidConfiguration(f"Warehouse capacity must be positive, got {self.warehouse_capacity}.")
        if not 0.0 < self.threshold <= 1.0:
            raise InvalidConfiguration(f"Fill threshold must be in (0, 1], got {self.threshold}.")
        if self.tick_interval < 0 or self.poll_interval < 0:
            raise InvalidConfiguration("Intervals must be non-negative.")
