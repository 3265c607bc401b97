"""Conversions applied to fetched metric values."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from kubemetrics.fetch import FetchedValues

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MILLI = 1_000_000
_MILLICORES_PER_CORE = 1000

_TRUE_VALUES = frozenset({"true", "True"})
_FALSE_VALUES = frozenset({"false", "False"})


class ConversionError(ValueError):
    """Raised when a fetched value cannot be converted."""


class GaugeValue(float):
    """A gauge sample value read from a Prometheus endpoint."""


class CounterValue(float):
    """A counter sample value read from a Prometheus endpoint."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_unsigned(value: Any) -> bool:
    return _is_int(value) and value >= 0


def from_nano(value: Any) -> float:
    """Convert an unsigned nanosecond-based counter (e.g. nano cores) to units."""
    if not _is_unsigned(value):
        raise ConversionError("error transforming to cpu cores")
    return value / _NANOS_PER_SECOND


def from_nano_to_milli(value: Any) -> float:
    """Convert an unsigned nanosecond value to milliseconds."""
    if not _is_unsigned(value):
        raise ConversionError("error transforming cpu cores to milliseconds")
    return value / _NANOS_PER_MILLI


def to_timestamp(value: Any) -> int:
    """Return the Unix time in whole seconds of a datetime.

    A naive datetime is taken to be in UTC.
    """
    if not isinstance(value, datetime):
        raise ConversionError("error transforming to timestamp")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(seconds=1)


def to_numeric_boolean(value: Any) -> int:
    """Map boolean-like values to 1, 0, or -1 for ``"unknown"``."""
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, str):
        if value in _TRUE_VALUES:
            return 1
        if value in _FALSE_VALUES:
            return 0
        if value == "unknown":
            return -1
    elif _is_int(value) and value in (0, 1):
        return value
    raise ConversionError(f"value '{value}' can not be converted to numeric boolean")


def to_cores(value: Any) -> float:
    """Convert a millicore integer to cores."""
    if not _is_int(value):
        raise ConversionError("error transforming to cores")
    return value / _MILLICORES_PER_CORE


def from_prometheus_numeric(value: Any) -> float:
    """Return the plain float held by a gauge or counter value."""
    if isinstance(value, (GaugeValue, CounterValue)):
        return float(value)
    raise ConversionError(
        f"invalid type value '{value}'. Expected 'gauge' or 'counter', "
        f"got '{type(value).__name__}'"
    )


def convert_value(value: Any) -> float:
    """Convert a numeric fetched value to float.

    Integers, floats and gauges are accepted, as is a :class:`FetchedValues`
    holding exactly one such value.
    """
    if isinstance(value, FetchedValues):
        if len(value) != 1:
            raise ConversionError("unable to convert FetchedValues")
        (single,) = value.values()
        return convert_value(single)
    if _is_int(value):
        return float(value)
    if isinstance(value, float) and not isinstance(value, CounterValue):
        return float(value)
    raise ConversionError(f"type not supported {type(value).__name__}")


def compute_percentage(dividend: Any, divisor: Any) -> float:
    """Return ``dividend / divisor * 100``."""
    try:
        a = convert_value(dividend)
    except ConversionError as exc:
        raise ConversionError(f"casting dividend: {exc}") from exc
    try:
        b = convert_value(divisor)
    except ConversionError as exc:
        raise ConversionError(f"casting divisor: {exc}") from exc
    if b == 0:
        raise ConversionError("division by zero")
    return a / b * 100