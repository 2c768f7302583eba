from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfo

ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = ROOT / "backend"
EXPORT_DIR = ROOT / "exports"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from evaluation_api import config  # noqa: E402
from evaluation_api.main import Base, engine, store  # noqa: E402
from evaluation_api.sheets import export_evaluations_csv  # noqa: E402


def parse_args():
    p = argparse.ArgumentParser(description="Export the evaluation table to a CSV file.")
    p.add_argument("--out", help="Output path (default: exports/evaluation_export_<timestamp>.csv)")
    return p.parse_args()

def main() -> None:
    args = parse_args()
    Base.metadata.create_all(engine)
    export = export_evaluations_csv(store)
    if export is None:
        raise SystemExit("No evaluation table found")
    if args.out:
        out_path = Path(args.out).resolve()
    else:
        stamp = datetime.now(timezone.utc).astimezone(ZoneInfo(config.TIMEZONE)).strftime("%Y%m%d_%H%M%S")
        out_path = EXPORT_DIR / f"evaluation_export_{stamp}.csv"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(export.content, encoding="utf-8")
    print({"rows": export.row_count, "path": str(out_path)})

if __name__ == "__main__":
    main()
