import threading
from collections import defaultdict
from typing import Dict

from ..core.ids import GoodsName


class ProductionLedger:
    """
    Cumulative produced units per goods kind. Safe for concurrent increments
    from many production workers.
    """

    def __init__(self):
        self._produced: Dict[GoodsName, int] = defaultdict(int)
        self._lock = threading.Lock()

    def get(self, goods_name: GoodsName, default_qty: int = 0) -> int:
        """Returns the produced count for a goods kind, or a default if never recorded."""
        with self._lock:
            return self._produced.get(goods_name, default_qty)

    def add(self, goods_name: GoodsName, quantity: int):
        """Credits produced units to a goods kind. Zero is recorded so the kind shows up in reports."""
        if quantity < 0:
            raise ValueError("Produced quantity must be non-negative.")
        with self._lock:
            self._produced[goods_name] += quantity

    def __getitem__(self, goods_name: GoodsName) -> int:
        return self.get(goods_name)

    def __contains__(self, goods_name: object) -> bool:
        with self._lock:
            return goods_name in self._produced

    def to_dict(self) -> Dict[GoodsName, int]:
        with self._lock:
            return dict(self._produced)
