from __future__ import annotations

import csv
import io
import logging
from typing import NamedTuple, Optional

from . import config
from .evaluation import EVALUATION_HEADER
from .store import RowStore

logger = logging.getLogger(__name__)


class CsvExport(NamedTuple):
    content: str
    row_count: int


INSTRUCTORS_HEADER = ["Center", "Week", "Day", "Period", "Instructor1", "Instructor2"]

SAMPLE_SCHEDULE = [
    ["ลาดกระบัง", "1", "เสาร์", "เช้า", "อาจารย์สมชาย", "อาจารย์สมหญิง"],
    ["ลาดกระบัง", "1", "เสาร์", "บ่าย", "อาจารย์สมศักดิ์", ""],
    ["ลาดกระบัง", "1", "อาทิตย์", "เช้า", "อาจารย์สมพงษ์", "อาจารย์สมใจ"],
    ["บางพลัด", "1", "เสาร์", "เช้า", "อาจารย์วีรชัย", ""],
    ["ระยอง", "1", "เสาร์", "เช้า", "อาจารย์นันทา", "อาจารย์สุชาดา"],
    ["ศรีราชา", "1", "อาทิตย์", "บ่าย", "อาจารย์ปราณี", ""],
]


def provision_tables(store: RowStore, seed_sample: bool = config.SEED_SAMPLE_SCHEDULE) -> list[str]:
    created = []
    if not store.has_table(config.INSTRUCTORS_TABLE):
        store.create_table(config.INSTRUCTORS_TABLE, INSTRUCTORS_HEADER, SAMPLE_SCHEDULE if seed_sample else ())
        created.append(config.INSTRUCTORS_TABLE)
    if not store.has_table(config.EVALUATION_TABLE):
        store.create_table(config.EVALUATION_TABLE, EVALUATION_HEADER)
        created.append(config.EVALUATION_TABLE)
    if created:
        logger.info("Provisioned tables: %s", ", ".join(created))
    return created


def clear_evaluations(store: RowStore) -> int:
    if not store.has_table(config.EVALUATION_TABLE):
        return 0
    removed = store.clear_body(config.EVALUATION_TABLE)
    logger.info("Cleared %d evaluation rows", removed)
    return removed


def export_evaluations_csv(store: RowStore) -> Optional[CsvExport]:
    """Render the evaluation table (header included) as CSV with every cell quoted; None when the table is missing.

    `row_count` counts evaluation rows, not CSV lines: a quoted comment may span several lines.
    """
    if not store.has_table(config.EVALUATION_TABLE):
        return None
    rows = store.scan(config.EVALUATION_TABLE)
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    logger.info("Exported %d evaluation rows", len(rows) - 1)
    return CsvExport(content=buf.getvalue(), row_count=len(rows) - 1)
