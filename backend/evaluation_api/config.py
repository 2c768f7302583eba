from __future__ import annotations

import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


DATABASE_URL = os.getenv("EVAL_DATABASE_URL", "sqlite:///./evaluation.db")
STORE_NAME = os.getenv("EVAL_STORE_NAME", "Teaching Evaluation")
TIMEZONE = os.getenv("EVAL_TIMEZONE", "Asia/Bangkok")
SEED_SAMPLE_SCHEDULE = _flag("EVAL_SEED_SAMPLE_SCHEDULE", "true")
LOG_LEVEL = os.getenv("EVAL_LOG_LEVEL", "INFO").upper()

APP_VERSION = "2.0.1"
INSTRUCTORS_TABLE = "instructors"
EVALUATION_TABLE = "evaluation"
