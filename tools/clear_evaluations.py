from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from evaluation_api import config  # noqa: E402
from evaluation_api.main import Base, engine, store  # noqa: E402
from evaluation_api.sheets import clear_evaluations  # noqa: E402


def parse_args():
    p = argparse.ArgumentParser(description="Delete every submitted evaluation (the header row is kept).")
    p.add_argument("--apply", action="store_true", help="Actually delete rows (default is dry-run)")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    Base.metadata.create_all(engine)
    if not store.has_table(config.EVALUATION_TABLE):
        print({"table": config.EVALUATION_TABLE, "exists": False})
        return
    pending = len(store.scan(config.EVALUATION_TABLE)) - 1
    if not args.apply:
        print({"table": config.EVALUATION_TABLE, "would_remove": pending, "dry_run": True})
        return
    removed = clear_evaluations(store)
    print({"table": config.EVALUATION_TABLE, "removed": removed})


if __name__ == "__main__":
    main()
