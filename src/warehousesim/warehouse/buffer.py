from __future__ import annotations
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, TYPE_CHECKING

from ..core.ids import GoodsName
from ..economy.goods import GoodsKind

if TYPE_CHECKING:
    from ..economy.production import ProducerSource


class BufferClosed(Exception):
    """Raised when a unit is pushed into a warehouse that no longer accepts production."""
    pass


@dataclass(frozen=True, eq=False)
class UnitBatch:
    # eq=False: every batch is a distinct physical unit, compared by identity.
    source: ProducerSource
    goods: GoodsKind
    count: int = 1

    def __post_init__(self):
        if self.count != 1:
            raise ValueError(f"A unit batch holds exactly one unit, got {self.count}.")


class SharedBuffer:
    """
    Unordered store of produced units awaiting shipment.

    Many production workers push concurrently, a single monitor drains. Each
    operation is atomic under one lock; a push racing a drain may land on
    either side of it.
    """

    def __init__(self):
        self._items: List[UnitBatch] = []
        self._units = 0
        self._lock = threading.Lock()
        self._closed = False

    def push(self, batch: UnitBatch):
        with self._lock:
            if self._closed:
                raise BufferClosed("Warehouse is closed for new production.")
            self._items.append(batch)
            self._units += batch.count

    def restore(self, batches: Iterable[UnitBatch]):
        """
        Re-merges units that were drained but not shipped. Allowed after close():
        these are the same logical units, not new production.
        """
        batches = list(batches)
        if not batches:
            return
        with self._lock:
            self._items.extend(batches)
            self._units += sum(b.count for b in batches)

    def drain_all(self) -> List[UnitBatch]:
        """Atomically removes and returns everything currently in the buffer."""
        with self._lock:
            drained, self._items = self._items, []
            self._units = 0
        return drained

    def count(self) -> int:
        with self._lock:
            return self._units

    def counts_by_goods(self) -> Dict[GoodsName, int]:
        counts: Counter = Counter()
        with self._lock:
            for batch in self._items:
                counts[batch.goods.name] += batch.count
        return dict(counts)

    def close(self):
        with self._lock:
            self._closed = True

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def __len__(self) -> int:
        return self.count()
