from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Sequence

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from .errors import StoreError, TableNotFound, WriteError

logger = logging.getLogger(__name__)

Row = list[Any]


class Base(DeclarativeBase):
    pass


class SheetTable(Base):
    __tablename__ = "sheet_tables"
    name: Mapped[str] = mapped_column(String, primary_key=True)
    header_json: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class SheetRow(Base):
    __tablename__ = "sheet_rows"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    table_name: Mapped[str] = mapped_column(String, ForeignKey("sheet_tables.name"), index=True)
    position: Mapped[int] = mapped_column(Integer)
    values_json: Mapped[str] = mapped_column(Text)


class RowStore:
    """
    Spreadsheet-like persistence: named tables, each with a header row and an ordered body.

    Row numbers follow sheet conventions, the header is row 1 and the first body row is row 2.
    """

    def __init__(self, session_factory: Callable[[], Session], name: str = "Row Store"):
        self._session_factory = session_factory
        self.name = name

    def has_table(self, table_name: str) -> bool:
        try:
            with self._session_factory() as db:
                return db.get(SheetTable, table_name) is not None
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read table {table_name}: {exc}") from exc

    def create_table(self, table_name: str, header: Sequence[Any], rows: Iterable[Sequence[Any]] = ()) -> None:
        try:
            with self._session_factory() as db:
                if db.get(SheetTable, table_name) is not None:
                    raise WriteError(f"Table already exists: {table_name}")
                db.add(SheetTable(name=table_name, header_json=json.dumps(list(header), ensure_ascii=False)))
                db.flush()
                for position, row in enumerate(rows, start=1):
                    db.add(SheetRow(table_name=table_name, position=position, values_json=json.dumps(list(row), ensure_ascii=False)))
                db.commit()
        except SQLAlchemyError as exc:
            raise WriteError(f"Could not create table {table_name}: {exc}") from exc
        logger.info("Created table %s", table_name)

    def scan(self, table_name: str) -> list[Row]:
        try:
            with self._session_factory() as db:
                table = self._require_table(db, table_name)
                body = db.scalars(select(SheetRow).where(SheetRow.table_name == table_name).order_by(SheetRow.position, SheetRow.id)).all()
                rows = [json.loads(table.header_json)]
                rows.extend(json.loads(r.values_json) for r in body)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read table {table_name}: {exc}") from exc
        logger.debug("Scanned %s: %d rows", table_name, len(rows))
        return rows

    def append(self, table_name: str, row: Sequence[Any]) -> int:
        try:
            with self._session_factory() as db:
                self._require_table(db, table_name)
                last_position = db.scalar(select(func.max(SheetRow.position)).where(SheetRow.table_name == table_name)) or 0
                db.add(SheetRow(table_name=table_name, position=last_position + 1, values_json=json.dumps(list(row), ensure_ascii=False)))
                db.commit()
                body_count = db.scalar(select(func.count(SheetRow.id)).where(SheetRow.table_name == table_name)) or 0
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            raise WriteError(f"Could not append to {table_name}: {exc}") from exc
        return body_count + 1

    def replace_body(self, table_name: str, rows: Sequence[Sequence[Any]]) -> int:
        """
        Delete every body row, then insert `rows`.

        The two phases are committed separately: if the insert fails the table is left with
        only its header.
        """
        removed = self.clear_body(table_name)
        try:
            with self._session_factory() as db:
                for position, row in enumerate(rows, start=1):
                    db.add(SheetRow(table_name=table_name, position=position, values_json=json.dumps(list(row), ensure_ascii=False)))
                db.commit()
        except (SQLAlchemyError, TypeError, ValueError) as exc:
            logger.error("Insert into %s failed after %d rows were deleted; table body is now empty", table_name, removed)
            raise WriteError(f"Could not write rows to {table_name}: {exc}") from exc
        return len(rows)

    def clear_body(self, table_name: str) -> int:
        try:
            with self._session_factory() as db:
                self._require_table(db, table_name)
                result = db.execute(delete(SheetRow).where(SheetRow.table_name == table_name))
                db.commit()
        except SQLAlchemyError as exc:
            raise WriteError(f"Could not clear {table_name}: {exc}") from exc
        return result.rowcount or 0

    def describe(self) -> dict:
        try:
            with self._session_factory() as db:
                tables = db.scalars(select(SheetTable).order_by(SheetTable.created_at, SheetTable.name)).all()
                counts = dict(db.execute(select(SheetRow.table_name, func.count(SheetRow.id)).group_by(SheetRow.table_name)).all())
                return {
                    "name": self.name,
                    "tables": [
                        {"name": t.name, "rows": counts.get(t.name, 0) + 1, "columns": len(json.loads(t.header_json))}
                        for t in tables
                    ],
                }
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not describe store: {exc}") from exc

    @staticmethod
    def _require_table(db: Session, table_name: str) -> SheetTable:
        table = db.get(SheetTable, table_name)
        if table is None:
            raise TableNotFound(table_name)
        return table
