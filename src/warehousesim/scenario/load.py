from pathlib import Path
from typing import Any, Dict, List
import logging
import yaml

from ..core.ids import CarrierName, GoodsName, ProducerName
from ..economy.goods import GoodsKind
from ..economy.production import ProducerSource
from ..logistics.carriers import CarrierKind
from .model import SimulationConfig

logger = logging.getLogger(__name__)


class ScenarioSchemaError(Exception):
    """Raised when there is a problem with the scenario data schema."""
    pass


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ScenarioSchemaError(f"Missing key '{key}' in {where}.")
    return data[key]


def _number(section: Dict[str, Any], key: str, default: Any, where: str, integer: bool = False) -> Any:
    value = section.get(key, default)
    allowed = int if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, allowed):
        kind = "an integer" if integer else "a number"
        raise ScenarioSchemaError(f"'{key}' in {where} must be {kind}: {value!r}")
    return value


def _mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ScenarioSchemaError(f"{where} must be a mapping: {value!r}")
    return value


def _check_unique(names: List[str], what: str):
    if len(names) != len(set(names)):
        raise ScenarioSchemaError(f"Duplicate {what} names found.")


def parse_scenario(data: Dict[str, Any], source: str = "<scenario>") -> SimulationConfig:
    """Builds a SimulationConfig from already-parsed scenario data."""
    if not isinstance(data, dict):
        raise ScenarioSchemaError(f"Top level of {source} must be a mapping.")

    goods_data = _require(data, 'goods', source)
    factories_data = _require(data, 'factories', source)
    trucks_data = _require(data, 'trucks', source)
    for key, value in (('goods', goods_data), ('factories', factories_data), ('trucks', trucks_data)):
        if not isinstance(value, list):
            raise ScenarioSchemaError(f"'{key}' in {source} must be a list.")
        for entry in value:
            if not isinstance(entry, dict):
                raise ScenarioSchemaError(f"Entries of '{key}' in {source} must be mappings: {entry!r}")

    _check_unique([g.get('name') for g in goods_data], "goods")
    _check_unique([f.get('name') for f in factories_data], "factory")
    _check_unique([t.get('name') for t in trucks_data], "truck")

    goods: Dict[GoodsName, GoodsKind] = {}
    for g_data in goods_data:
        name = GoodsName(str(_require(g_data, 'name', f"goods entry in {source}")))
        goods[name] = GoodsKind(
            name=name,
            weight=float(_number(g_data, 'weight', 1.0, f"goods '{name}'")),
            package_type=str(g_data.get('package_type', 'Box')),
        )

    factories = []
    for f_data in factories_data:
        name = _require(f_data, 'name', f"factory entry in {source}")
        goods_name = GoodsName(str(_require(f_data, 'goods', f"factory '{name}' in {source}")))
        if goods_name not in goods:
            raise ScenarioSchemaError(f"Factory '{name}' references unknown goods '{goods_name}'.")
        rate = _require(f_data, 'production_rate', f"factory '{name}' in {source}")
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise ScenarioSchemaError(f"Invalid 'production_rate' for factory '{name}': {rate}")
        factories.append(ProducerSource(ProducerName(str(name)), goods[goods_name], float(rate)))

    fleet = []
    for t_data in trucks_data:
        name = _require(t_data, 'name', f"truck entry in {source}")
        capacity = _require(t_data, 'capacity', f"truck '{name}' in {source}")
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise ScenarioSchemaError(f"Truck '{name}' capacity must be an integer: {capacity}")
        fleet.append(CarrierKind(CarrierName(str(name)), capacity))

    warehouse = _mapping(data.get('warehouse'), f"'warehouse' in {source}")
    timing = _mapping(data.get('timing'), f"'timing' in {source}")
    defaults = SimulationConfig(producers=(), fleet=())
    seed = data.get('seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ScenarioSchemaError(f"'seed' in {source} must be an integer: {seed!r}")
    return SimulationConfig(
        producers=tuple(factories),
        fleet=tuple(fleet),
        capacity_multiplier=_number(warehouse, 'capacity_multiplier', defaults.capacity_multiplier, "'warehouse'"),
        threshold=_number(warehouse, 'threshold', defaults.threshold, "'warehouse'"),
        ticks=_number(data, 'ticks', defaults.ticks, source, integer=True),
        tick_interval=_number(timing, 'tick_interval', defaults.tick_interval, "'timing'"),
        poll_interval=_number(timing, 'poll_interval', defaults.poll_interval, "'timing'"),
        seed=seed,
    )


def load_scenario(path: Path) -> SimulationConfig:
    """Loads a scenario YAML file. Semantic checks are left to SimulationConfig.validate()."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        raise ScenarioSchemaError(f"YAML file '{path}' is empty or malformed.")
    config = parse_scenario(data, source=str(path))
    logger.debug("Loaded scenario from %s: %d factories, %d trucks.", path, len(config.producers), len(config.fleet))
    return config
