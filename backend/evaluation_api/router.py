from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union

from . import config
from .errors import MissingField, ParseError, Result, ServiceError, StoreError, UnknownAction
from .evaluation import evaluation_row, format_timestamp, validate_evaluation
from .schedule import decode, dump_schedule, encode, parse_schedule
from .store import RowStore

logger = logging.getLogger(__name__)

GET_ACTIONS = ["health", "getInstructors"]
FEATURES = ["instructor-management", "evaluation-submission"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class Router:
    """
    Single-step dispatcher from an inbound request to one action, wrapped in a uniform envelope.

    Success: {"status": "success", "timestamp": ..., **fields}
    Failure: {"status": "error", "message": ..., "timestamp": ...}
    """

    def __init__(
        self,
        store: RowStore,
        clock: Callable[[], datetime] = utc_now,
        timezone_name: str = config.TIMEZONE,
        instructors_table: str = config.INSTRUCTORS_TABLE,
        evaluation_table: str = config.EVALUATION_TABLE,
    ):
        self.store = store
        self.clock = clock
        self.timezone_name = timezone_name
        self.instructors_table = instructors_table
        self.evaluation_table = evaluation_table
        self._actions: dict[str, Callable[[Mapping[str, Any]], Result[dict]]] = {
            "health": lambda _payload: self.health(),
            "getInstructors": lambda _payload: self.get_instructors(),
            "submitEvaluation": self.submit_evaluation,
            "updateInstructors": lambda payload: self.update_instructors(payload.get("instructorsMap") or payload.get("data")),
        }

    # === envelopes ===

    def success(self, **fields: Any) -> dict:
        return {"status": "success", "timestamp": iso_timestamp(self.clock()), **fields}

    def error(self, message: str) -> dict:
        return {"status": "error", "message": message, "timestamp": iso_timestamp(self.clock())}

    def wrap(self, result: Result[dict]) -> dict:
        if result.ok:
            return self.success(**result.value)
        return self.error(result.error.message)

    # === transport entry points ===

    def handle_get(self, params: Optional[Mapping[str, str]]) -> dict:
        try:
            if not params:
                return self.success(
                    message="GET request received successfully",
                    availableActions=GET_ACTIONS,
                    version=config.APP_VERSION,
                    note="No parameters provided",
                )
            action = params.get("action")
            if action in GET_ACTIONS:
                return self.dispatch(action, {})
            return self.success(message="GET request received successfully", availableActions=GET_ACTIONS, version=config.APP_VERSION)
        except Exception as exc:
            logger.exception("GET request failed")
            return self.error(f"GET request failed: {exc}")

    def handle_post(self, body: Union[bytes, str, None]) -> dict:
        try:
            if isinstance(body, bytes):
                body = body.decode("utf-8-sig")
            if not body or not body.strip():
                return {"status": "preflight-ok"}
            request_data = json.loads(body)
        except (ValueError, RecursionError) as exc:
            logger.warning("Rejected POST body: %s", exc)
            return self.error(ParseError(str(exc)).message)
        if not isinstance(request_data, dict) or not request_data.get("action"):
            return self.error(MissingField("action").message)
        return self.dispatch(str(request_data["action"]), request_data)

    def dispatch(self, action: str, payload: Mapping[str, Any]) -> dict:
        handler = self._actions.get(action)
        if handler is None:
            logger.warning("Unknown action %r", action)
            return self.error(UnknownAction(action).message)
        logger.info("Dispatching %s", action)
        try:
            return self.wrap(handler(payload))
        except Exception as exc:
            logger.exception("Action %s raised", action)
            return self.error(f"Request failed: {exc}")

    # === actions ===

    def health(self) -> Result[dict]:
        try:
            info = self.store.describe()
        except StoreError as exc:
            return self._prefixed("Health check failed", exc)
        return Result.succeed(
            {
                "message": "System is healthy",
                "version": config.APP_VERSION,
                "storeName": info["name"],
                "features": FEATURES,
                "tables": info["tables"],
            }
        )

    def get_instructors(self) -> Result[dict]:
        try:
            rows = self.store.scan(self.instructors_table)
        except StoreError as exc:
            return self._prefixed("Failed to get instructors", exc)
        decoded = decode(rows)
        logger.info("Decoded %d centers from %d rows", len(decoded.data), decoded.record_count)
        return Result.succeed(
            {
                "data": dump_schedule(decoded.data),
                "message": "Instructors data retrieved successfully",
                "recordCount": decoded.record_count,
            }
        )

    def submit_evaluation(self, payload: Mapping[str, Any]) -> Result[dict]:
        validated = validate_evaluation(payload)
        if not validated.ok:
            logger.warning("Evaluation rejected: %s", validated.error)
            return self._prefixed("Failed to submit evaluation", validated.error)
        record = validated.value
        row = evaluation_row(record, format_timestamp(self.clock(), self.timezone_name))
        try:
            row_number = self.store.append(self.evaluation_table, row)
        except StoreError as exc:
            return self._prefixed("Failed to submit evaluation", exc)
        logger.info("Evaluation stored at row %d", row_number)
        return Result.succeed(
            {
                "message": "Evaluation submitted successfully",
                "rowNumber": row_number,
                "submittedData": record.model_dump(include={"center", "week", "day", "period", "instructor1", "instructor2"}),
            }
        )

    def update_instructors(self, instructors_map: Any) -> Result[dict]:
        parsed = parse_schedule(instructors_map)
        if not parsed.ok:
            return self._prefixed("Failed to update instructors", parsed.error)
        rows = encode(parsed.value)
        try:
            written = self.store.replace_body(self.instructors_table, rows)
        except StoreError as exc:
            return self._prefixed("Failed to update instructors", exc)
        logger.info("Replaced instructors table with %d rows", written)
        return Result.succeed({"message": "Instructors data updated successfully", "rowsUpdated": written})

    @staticmethod
    def _prefixed(context: str, error: ServiceError) -> Result[dict]:
        wrapped = ServiceError(f"{context}: {error.message}")
        wrapped.__cause__ = error
        return Result.fail(wrapped)
