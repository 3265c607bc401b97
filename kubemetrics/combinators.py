"""Fetch functions built by combining other fetch functions."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from kubemetrics.convert import ConversionError, compute_percentage
from kubemetrics.fetch import FetchedValues, FetchError, FetchFunc, RawGroups, from_raw

GuessFunc = Callable[[str], str]

_WORD_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")


def _rewrap(exc: FetchError | ConversionError, message: str) -> Exception:
    return type(exc)(f"{message}: {exc}")


def subtract(left: FetchFunc, right: FetchFunc) -> FetchFunc:
    """Return a fetch function yielding ``left - right``; both must be floats."""

    def fetch(group_label: str, entity_id: str, groups: RawGroups) -> float:
        left_value = left(group_label, entity_id, groups)
        right_value = right(group_label, entity_id, groups)
        if not isinstance(left_value, float) or not isinstance(right_value, float):
            raise ConversionError(
                f"cannot subtract {type(right_value).__name__} "
                f"from {type(left_value).__name__}: float values expected"
            )
        return left_value - right_value

    return fetch


def fetch_with_default(fetch: FetchFunc, default_value: Any) -> FetchFunc:
    """Return a fetch function that yields ``default_value`` when ``fetch`` fails."""

    def fetched(group_label: str, entity_id: str, groups: RawGroups) -> Any:
        try:
            return fetch(group_label, entity_id, groups)
        except Exception:  # any failure means the metric is treated as missing
            return default_value

    return fetched


def fetch_if_missing(replacement: FetchFunc, main: FetchFunc) -> FetchFunc:
    """Return a fetch function using ``replacement`` only when ``main`` fails.

    When ``main`` succeeds an empty :class:`FetchedValues` is returned.
    """

    def fetched(group_label: str, entity_id: str, groups: RawGroups) -> Any:
        try:
            main(group_label, entity_id, groups)
        except Exception:  # main metric is missing
            return replacement(group_label, entity_id, groups)
        return FetchedValues()

    return fetched


def to_utilization(dividend_func: FetchFunc, divisor_func: FetchFunc) -> FetchFunc:
    """Return a fetch function computing ``dividend / divisor * 100``."""

    def fetch(group_label: str, entity_id: str, groups: RawGroups) -> float:
        try:
            dividend = dividend_func(group_label, entity_id, groups)
        except (FetchError, ConversionError) as exc:
            raise _rewrap(exc, "getting divident metric") from exc
        try:
            divisor = divisor_func(group_label, entity_id, groups)
        except (FetchError, ConversionError) as exc:
            raise _rewrap(exc, "getting divisor metric") from exc
        try:
            return compute_percentage(dividend, divisor)
        except ConversionError as exc:
            raise ConversionError(f"computing utilization: {exc}") from exc

    return fetch


def _unsigned(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConversionError(
            f"metric {name} must be an unsigned integer, got {type(value).__name__}"
        )
    return value


def to_complement_percentage(desired_metric: str, complement_metric: str) -> FetchFunc:
    """Return a fetch function computing ``desired / (desired + complement) * 100``."""

    def fetch(group_label: str, entity_id: str, groups: RawGroups) -> float:
        complement = from_raw(complement_metric)(group_label, entity_id, groups)
        desired = from_raw(desired_metric)(group_label, entity_id, groups)
        desired = _unsigned(desired, desired_metric)
        complement = _unsigned(complement, complement_metric)
        try:
            return compute_percentage(desired, desired + complement)
        except ConversionError as exc:
            raise ConversionError(
                f"error computing percentage for {desired_metric} & "
                f"{complement_metric}: {exc}"
            ) from exc

    return fetch


def is_persistent_volume() -> FetchFunc:
    """Return a fetch function yielding ``"true"`` when a PVC name is present."""
    pvc_name = from_raw("pvcName")

    def fetch(group_label: str, entity_id: str, groups: RawGroups) -> str:
        try:
            name = pvc_name(group_label, entity_id, groups)
        except FetchError:
            return "false"
        return "true" if name != "" else "false"

    return fetch


def _k8s_metric_set_type(group: str) -> str:
    words = (w for w in _WORD_SEPARATORS.split(group) if w)
    camel = "".join(w[0].upper() + w[1:] for w in words)
    return f"K8s{camel}Sample"


def metric_set_type_guesser_with_custom_group(group: str) -> GuessFunc:
    """Return a guesser naming the metric set after ``group``, ignoring its input."""

    def guess(_group_label: str) -> str:
        return _k8s_metric_set_type(group)

    return guess