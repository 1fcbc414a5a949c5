from __future__ import annotations
import logging
import math
import threading
from dataclasses import dataclass

from ..core.clock import SystemClock
from ..core.ids import ProducerName
from ..warehouse.buffer import BufferClosed, SharedBuffer, UnitBatch
from .goods import GoodsKind
from .ledger import ProductionLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProducerSource:
    name: ProducerName
    goods: GoodsKind
    production_rate: float  # units per tick; fractional part is never produced

    @property
    def units_per_tick(self) -> int:
        return math.floor(self.production_rate)


class ProductionWorker:
    """
    Feeds one factory's output into the shared warehouse for a fixed number of ticks.

    Cancellation and a closed warehouse are both normal end-of-life paths: the
    worker stops the current tick, credits the ledger with what it actually
    delivered and returns.
    """

    def __init__(
        self,
        source: ProducerSource,
        buffer: SharedBuffer,
        ledger: ProductionLedger,
        ticks: int,
        pacing_delay: float,
        cancel: threading.Event,
        clock: SystemClock,
    ):
        self.source = source
        self.buffer = buffer
        self.ledger = ledger
        self.ticks = ticks
        self.pacing_delay = pacing_delay
        self.cancel = cancel
        self.clock = clock

        self.ticks_completed = 0
        self.units_pushed = 0

    def run(self):
        for tick in range(self.ticks):
            if self.cancel.is_set():
                logger.info("Production at factory %s cancelled.", self.source.name)
                return
            if not self._produce_tick(tick):
                return
            self.ticks_completed += 1
            self.clock.wait(self.cancel, self.pacing_delay)
        logger.debug("Factory %s finished after %d ticks.", self.source.name, self.ticks_completed)

    def _produce_tick(self, tick: int) -> bool:
        """Pushes one tick's worth of units. Returns False if the worker must stop."""
        produced_units = self.source.units_per_tick
        pushed = 0
        try:
            for _ in range(produced_units):
                self.buffer.push(UnitBatch(self.source, self.source.goods))
                pushed += 1
                if self.cancel.is_set():
                    logger.info("Production at factory %s cancelled mid-tick.", self.source.name)
                    return False
        except BufferClosed:
            logger.info("Warehouse closed, factory %s stops production.", self.source.name)
            return False
        finally:
            self.ledger.add(self.source.goods.name, pushed)
            self.units_pushed += pushed

        logger.info(
            "Factory %s: tick %d delivered %d x %s",
            self.source.name, tick + 1, produced_units, self.source.goods,
        )
        return True
