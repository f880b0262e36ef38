"""CLI entry point for the OEE engine."""

from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .common.config import get_settings
from .counter import CounterConfig, PulseCounterService
from .engine import OEEEngine
from .points import InMemoryPointStore
from .points.names import ALL_CONFIG, ALL_INPUTS, ALL_OUTPUTS, TEXT_OUTPUTS, Counter

logger = logging.getLogger(__name__)


def load_points(path: Optional[str]) -> Dict[str, Any]:
    """Point name -> initial value, from a JSON object file."""
    if not path:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SystemExit(f"Cannot load points file {path}: {e}")
    if not isinstance(data, dict):
        raise SystemExit(f"Points file {path} must contain a JSON object")
    return data


def build_store(points: Dict[str, Any], *, with_counter: bool = False) -> InMemoryPointStore:
    store = InMemoryPointStore(points, declared=(*ALL_OUTPUTS, *points), text_points=TEXT_OUTPUTS)
    if with_counter:
        store.declare(
            Counter.MACHINE_RUNNING_BIT,
            Counter.GOOD_PART_PULSE,
            Counter.BAD_PART_PULSE,
            Counter.RESET_COMMAND,
            Counter.GOOD_PART_COUNT,
            Counter.BAD_PART_COUNT,
            Counter.TOTAL_RUNTIME_SECONDS,
        )
        store.declare(Counter.TOTAL_RUNTIME_FORMATTED, text=True)
    return store


def main(argv: Optional[list] = None) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    p = argparse.ArgumentParser(description="OEE metrics engine over an in-memory point store")
    p.add_argument("--points", default=settings.points_file, help="JSON file with initial point values")
    p.add_argument("--once", action="store_true", help="run a single tick, print the result and exit")
    p.add_argument("--with-counter", action="store_true", default=settings.with_counter, help="also run the pulse/runtime counter")
    p.add_argument("--duration", type=float, default=0.0, help="stop after N seconds (0 = until Ctrl+C)")
    p.add_argument("--list-points", action="store_true", help="print known point names and exit")
    args = p.parse_args(argv)

    if args.list_points:
        for name in (*ALL_INPUTS, *ALL_CONFIG, *ALL_OUTPUTS):
            print(name)
        return

    store = build_store(load_points(args.points), with_counter=args.with_counter)
    engine = OEEEngine(store, settings)

    if args.once:
        engine.prepare()
        result = engine.tick()
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    counter = None
    if args.with_counter:
        counter = PulseCounterService(
            store,
            CounterConfig.from_settings(settings),
        )
        counter.start()

    logger.info("OEE engine started (interval=%dms)", settings.update_rate_ms)
    engine.start()
    deadline = time.monotonic() + args.duration if args.duration > 0 else None
    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(0.2)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping...")
    finally:
        engine.stop()
        if counter is not None:
            counter.stop()

    result = engine.last_result
    if result is not None:
        logger.info(
            "Last tick: Q=%.2f P=%.2f A=%.2f OEE=%.2f status=%s",
            result.quality, result.performance, result.availability, result.oee,
            result.system_status.value,
        )


if __name__ == "__main__":
    main()
