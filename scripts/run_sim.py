import argparse
import logging
import sys
from pathlib import Path

# Add the source tree to the Python path for runs without an installed package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from warehousesim.core.clock import ScaledClock
from warehousesim.core.sim import run_simulation
from warehousesim.scenario.bootstrap import default_config
from warehousesim.scenario.load import ScenarioSchemaError, load_scenario
from warehousesim.scenario.model import InvalidConfiguration


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the warehouse shipping simulation.")
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Path to a scenario YAML file. Without it a roster is generated.",
    )
    parser.add_argument(
        "--factories", type=int, default=None, help="Number of generated factories (default 3). Not allowed with --scenario."
    )
    parser.add_argument(
        "--base-rate",
        type=float,
        default=None,
        help="Production rate of the first generated factory (default 50). Not allowed with --scenario.",
    )
    parser.add_argument("--ticks", type=int, default=None, help="Number of production ticks.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for truck selection.")
    parser.add_argument(
        "--time-scale",
        type=float,
        default=1.0,
        help="Multiplier for every delay; 0 runs as fast as possible.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log production and shipping events.")
    args = parser.parse_args(argv)
    if args.scenario and (args.factories is not None or args.base_rate is not None):
        parser.error("--factories and --base-rate only apply to a generated roster, not to --scenario")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(threadName)s %(levelname)s %(message)s",
    )

    try:
        if args.scenario:
            config = load_scenario(Path(args.scenario))
            overrides = {}
            if args.ticks is not None:
                overrides["ticks"] = args.ticks
            if args.seed is not None:
                overrides["seed"] = args.seed
            if overrides:
                from dataclasses import replace
                config = replace(config, **overrides)
        else:
            config = default_config(
                num_factories=args.factories if args.factories is not None else 3,
                base_rate=args.base_rate if args.base_rate is not None else 50,
                ticks=args.ticks if args.ticks is not None else 100,
                seed=args.seed,
            )
        result = run_simulation(config, clock=ScaledClock(args.time_scale))
    except (InvalidConfiguration, ScenarioSchemaError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Warehouse capacity: {result.warehouse_capacity} units of goods\n")
    print(result.report())
    return 0


if __name__ == "__main__":
    sys.exit(main())
