from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import MAX_PAGE_LIMIT
from ..core.enums import SortOrder
from ..core.exceptions import InvalidQueryError, ValidationError
from .validators import optional_date, require_positive_int


def _raw(params: Mapping[str, Any], key: str) -> Optional[str]:
    value = params.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_page(params: Mapping[str, Any]) -> int:
    raw = _raw(params, "page")
    if raw is None:
        return 1
    try:
        return require_positive_int(raw, "page")
    except ValidationError as e:
        raise InvalidQueryError(str(e)) from e


def parse_limit(params: Mapping[str, Any], *, default: int, maximum: int = MAX_PAGE_LIMIT) -> int:
    raw = _raw(params, "limit")
    if raw is None:
        return default
    try:
        limit = require_positive_int(raw, "limit")
    except ValidationError as e:
        raise InvalidQueryError(str(e)) from e
    if limit > maximum:
        raise InvalidQueryError(f"limit must be at most {maximum}")
    return limit


def parse_sort_order(params: Mapping[str, Any], *, default: SortOrder = SortOrder.DESC) -> SortOrder:
    raw = _raw(params, "sortOrder")
    if raw is None:
        return default
    try:
        return SortOrder(raw.lower())
    except ValueError:
        raise InvalidQueryError("sortOrder must be 'asc' or 'desc'")


def parse_text(params: Mapping[str, Any], key: str) -> Optional[str]:
    return _raw(params, key)


def parse_date(params: Mapping[str, Any], key: str):
    try:
        return optional_date(_raw(params, key), key)
    except ValidationError as e:
        raise InvalidQueryError(str(e)) from e


def parse_bool(params: Mapping[str, Any], key: str) -> Optional[bool]:
    raw = _raw(params, key)
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise InvalidQueryError(f"{key} must be true or false")
