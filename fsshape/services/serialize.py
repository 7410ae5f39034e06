from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from result import Err, Ok, Result

from fsshape.models.stats import FIELD_ORDER, Distribution, StatisticsRecord
from fsshape.services.fs import DEFAULT_FS, FileSystem

FORMAT_NAME = "fsshape-stats"
FORMAT_VERSION = 1


class StatsFileErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    READ_FAILED = "read_failed"
    WRITE_FAILED = "write_failed"
    MALFORMED = "malformed"


@dataclass(slots=True, frozen=True)
class StatsFileError:
    code: StatsFileErrorCode
    path: str
    message: str


class MalformedStatsError(ValueError):
    pass


def to_dict(stats: StatisticsRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "cooked": stats.cooked,
    }
    for name, dist in stats.distributions():
        payload[name.value] = {str(key): value for key, value in dist.sorted_pairs()}
    return payload


def dumps(stats: StatisticsRecord) -> str:
    return json.dumps(to_dict(stats), indent=2) + "\n"


def _parse_key(raw: str, field_name: str) -> int:
    # int() alone would accept "+1", " 1" and "1_0".
    if not raw.isdigit() or not raw.isascii():
        raise MalformedStatsError(f"{field_name}: key {raw!r} is not a non-negative integer")
    return int(raw)


def _parse_distribution(payload: Any, field_name: str, cooked: bool) -> Distribution:
    if not isinstance(payload, dict):
        raise MalformedStatsError(f"{field_name}: expected an object")
    dist = Distribution()
    for raw_key, value in payload.items():
        key = _parse_key(raw_key, field_name)
        if key in dist:
            raise MalformedStatsError(f"{field_name}: duplicate key {key}")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedStatsError(f"{field_name}[{raw_key}]: value {value!r} is not a number")
        if (isinstance(value, float) and not math.isfinite(value)) or value < 0:
            raise MalformedStatsError(f"{field_name}[{raw_key}]: value {value!r} is not a finite non-negative number")
        if not cooked and not isinstance(value, int):
            raise MalformedStatsError(f"{field_name}[{raw_key}]: raw statistics hold integer counts")
        dist[key] = value
    return dist


def from_dict(payload: Any) -> StatisticsRecord:
    if not isinstance(payload, dict):
        raise MalformedStatsError("statistics must be a JSON object")
    if payload.get("format") != FORMAT_NAME:
        raise MalformedStatsError(f"not an {FORMAT_NAME} file")
    if payload.get("version") != FORMAT_VERSION:
        raise MalformedStatsError(f"unsupported version {payload.get('version')!r}")
    cooked = payload.get("cooked")
    if not isinstance(cooked, bool):
        raise MalformedStatsError("'cooked' must be true or false")

    stats = StatisticsRecord(cooked=cooked)
    for name in FIELD_ORDER:
        if name.value not in payload:
            raise MalformedStatsError(f"missing field {name.value!r}")
        setattr(stats, name.value, _parse_distribution(payload[name.value], name.value, cooked))
    return stats


def loads(text: str) -> StatisticsRecord:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedStatsError(f"invalid JSON: {exc}") from exc
    return from_dict(payload)


def save(stats: StatisticsRecord, path: str, fs: FileSystem = DEFAULT_FS) -> Result[None, StatsFileError]:
    """Write *stats* to *path*, replacing any existing file."""
    try:
        fs.write_text(path, dumps(stats))
    except OSError as exc:
        return Err(StatsFileError(StatsFileErrorCode.WRITE_FAILED, path, f"Cannot write statistics: {exc}"))
    return Ok(None)


def load(path: str, fs: FileSystem = DEFAULT_FS) -> Result[StatisticsRecord, StatsFileError]:
    if not fs.exists(path):
        return Err(StatsFileError(StatsFileErrorCode.NOT_FOUND, path, "Statistics file does not exist"))
    try:
        text = fs.read_text(path)
    except UnicodeDecodeError as exc:
        return Err(StatsFileError(StatsFileErrorCode.MALFORMED, path, f"Malformed statistics: not UTF-8 text: {exc}"))
    except OSError as exc:
        return Err(StatsFileError(StatsFileErrorCode.READ_FAILED, path, f"Cannot read statistics: {exc}"))
    try:
        return Ok(loads(text))
    except MalformedStatsError as exc:
        return Err(StatsFileError(StatsFileErrorCode.MALFORMED, path, f"Malformed statistics: {exc}"))
