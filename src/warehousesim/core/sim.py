import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from .clock import SystemClock
from .ids import GoodsName
from .rng import ChoiceSource, get_seeded_rng
from ..economy.ledger import ProductionLedger
from ..economy.production import ProductionWorker
from ..logistics.loader import DrainLoader
from ..logistics.shipping import ShipmentLog
from ..reports.statistics import StatisticsCollector
from ..scenario.model import SimulationConfig
from ..warehouse.buffer import SharedBuffer
from ..warehouse.monitor import MonitorState, WarehouseMonitor

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    warehouse_capacity: int
    ledger: ProductionLedger
    shipment_log: ShipmentLog
    leftover: Dict[GoodsName, int]  # units still in the warehouse at shutdown
    monitor_state: MonitorState
    elapsed: float = 0.0  # clock time from start to monitor stop

    def statistics(self) -> StatisticsCollector:
        return StatisticsCollector(self.shipment_log, self.ledger)

    def report(self) -> str:
        return self.statistics().render()


class Simulation:
    """
    Wires factories, the warehouse and its monitor for one run.

    Shutdown order: every factory finishes, the warehouse closes to new
    production, the monitor is cancelled, then joined.
    """

    def __init__(
        self,
        config: SimulationConfig,
        rng: Optional[ChoiceSource] = None,
        clock: Optional[SystemClock] = None,
    ):
        config.validate()
        self.config = config
        self.rng = rng if rng is not None else get_seeded_rng(config.seed)
        self.clock = clock if clock is not None else SystemClock()

        self.buffer = SharedBuffer()
        self.ledger = ProductionLedger()
        self.shipment_log = ShipmentLog()
        self.cancel = threading.Event()
        self.warehouse_capacity = config.warehouse_capacity

        self.workers: List[ProductionWorker] = [
            ProductionWorker(
                source=source,
                buffer=self.buffer,
                ledger=self.ledger,
                ticks=config.ticks,
                pacing_delay=config.pacing_delay,
                cancel=self.cancel,
                clock=self.clock,
            )
            for source in config.producers
        ]
        self.monitor = WarehouseMonitor(
            buffer=self.buffer,
            loader=DrainLoader(config.fleet, self.rng, self.shipment_log),
            warehouse_capacity=self.warehouse_capacity,
            threshold=config.threshold,
            poll_interval=config.poll_interval,
            cancel=self.cancel,
            clock=self.clock,
        )

    def run(self) -> SimulationResult:
        logger.info("Warehouse capacity: %d units of goods", self.warehouse_capacity)
        started = self.clock.now()

        factory_threads = [
            threading.Thread(target=w.run, name=f"factory-{w.source.name}", daemon=True)
            for w in self.workers
        ]
        monitor_thread = threading.Thread(target=self.monitor.run, name="warehouse-monitor", daemon=True)

        for t in factory_threads:
            t.start()
        monitor_thread.start()

        for t in factory_threads:
            t.join()

        self.buffer.close()
        self.cancel.set()
        monitor_thread.join()
        elapsed = self.clock.now() - started
        logger.info("Simulation finished after %.2f s with %d shipments.", elapsed, len(self.shipment_log))

        return SimulationResult(
            warehouse_capacity=self.warehouse_capacity,
            ledger=self.ledger,
            shipment_log=self.shipment_log,
            leftover=self.buffer.counts_by_goods(),
            monitor_state=self.monitor.state,
            elapsed=elapsed,
        )


def run_simulation(
    config: SimulationConfig,
    rng: Optional[ChoiceSource] = None,
    clock: Optional[SystemClock] = None,
) -> SimulationResult:
    return Simulation(config, rng=rng, clock=clock).run()
