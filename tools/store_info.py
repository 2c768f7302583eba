from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from evaluation_api import config  # noqa: E402
from evaluation_api.main import Base, engine, store  # noqa: E402


def main() -> None:
    Base.metadata.create_all(engine)
    info = store.describe()
    info["database_url"] = config.DATABASE_URL
    print(json.dumps(info, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
