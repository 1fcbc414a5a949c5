import logging
import threading
from enum import Enum
from typing import Optional

from ..core.clock import SystemClock
from ..logistics.loader import DrainLoader
from ..logistics.shipping import Shipment
from .buffer import SharedBuffer

logger = logging.getLogger(__name__)


class MonitorState(Enum):
    IDLE = "idle"
    DRAINING = "draining"
    STOPPED = "stopped"


class WarehouseMonitor:
    """
    Polls the warehouse fill ratio and calls a truck once it crosses the threshold.

    Cancellation is honoured only between poll cycles; a drain that has started
    always runs to completion.
    """

    def __init__(
        self,
        buffer: SharedBuffer,
        loader: DrainLoader,
        warehouse_capacity: int,
        threshold: float,
        poll_interval: float,
        cancel: threading.Event,
        clock: SystemClock,
    ):
        if warehouse_capacity <= 0:
            raise ValueError("Warehouse capacity must be positive.")
        self.buffer = buffer
        self.loader = loader
        self.warehouse_capacity = warehouse_capacity
        self.threshold = threshold
        self.poll_interval = poll_interval
        self.cancel = cancel
        self.clock = clock

        self.state = MonitorState.IDLE
        self.drain_count = 0
        self._exclusive = threading.Lock()

    def fill_ratio(self) -> float:
        return self.buffer.count() / self.warehouse_capacity

    def poll_once(self) -> Optional[Shipment]:
        """One poll cycle body: drain if the warehouse is full enough."""
        ratio = self.fill_ratio()
        if ratio < self.threshold:
            return None

        with self._exclusive:
            self.state = MonitorState.DRAINING
            logger.info("Warehouse is %.2f%% full. Unloading started.", ratio * 100)
            try:
                shipment = self.loader.unload(self.buffer)
                self.drain_count += 1
            finally:
                self.state = MonitorState.IDLE
        return shipment

    def run(self):
        try:
            while not self.cancel.is_set():
                self.poll_once()
                if self.clock.wait(self.cancel, self.poll_interval):
                    break
        finally:
            self.state = MonitorState.STOPPED
            logger.info("Warehouse management stopped.")
