from typing import List, Optional, Tuple

from ..core.ids import CarrierName, GoodsName, ProducerName
from ..economy.goods import GoodsKind
from ..economy.production import ProducerSource
from ..logistics.carriers import CarrierKind
from .model import SimulationConfig

DEFAULT_FLEET: Tuple[CarrierKind, ...] = (
    CarrierKind(CarrierName("Small truck"), 150),
    CarrierKind(CarrierName("Large truck"), 300),
)


def build_factories(num_factories: int, base_rate: float) -> List[ProducerSource]:
    """
    Factories A, B, C, ... each making one goods kind named after the factory
    in lower case. Every factory is 10% faster than the previous one and its
    goods 0.2 kg heavier.
    """
    if num_factories > 26:
        raise ValueError("At most 26 factories can be named A-Z.")
    factories = []
    for i in range(num_factories):
        factory_name = chr(ord("A") + i)
        goods = GoodsKind(
            name=GoodsName(factory_name.lower()),
            weight=round(1 + i * 0.2, 2),
            package_type=f"Box {i + 1}",
        )
        factories.append(ProducerSource(ProducerName(factory_name), goods, base_rate * (1 + i * 0.1)))
    return factories


def default_config(
    num_factories: int = 3,
    base_rate: float = 50,
    ticks: int = 100,
    seed: Optional[int] = None,
) -> SimulationConfig:
    return SimulationConfig(
        producers=tuple(build_factories(num_factories, base_rate)),
        fleet=DEFAULT_FLEET,
        ticks=ticks,
        seed=seed,
    )
