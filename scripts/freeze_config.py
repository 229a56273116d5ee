from __future__ import annotations

import argparse
import json
from pathlib import Path

from rebalance_sim.config import freeze_config, load_config, serialize_config, verify_config_lock


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate a run config and write its hash lock")
    parser.add_argument("config")
    parser.add_argument("--lock", default=None)
    parser.add_argument("--show", action="store_true", help="print the resolved config")
    args = parser.parse_args()

    path = Path(args.config)
    # Reject configs the simulator would refuse before pinning them.
    config = load_config(path)
    lock_path = freeze_config(path, args.lock)
    status = "ok" if verify_config_lock(path, lock_path) else "mismatch"
    print(f"Frozen {config.name} ({path}) -> {lock_path} ({status})")
    if args.show:
        print(json.dumps(serialize_config(config), indent=2))


if __name__ == "__main__":
    main()
