"""Fetch functions that read values out of raw metric groups.

Raw groups are nested mappings: group label -> entity id -> metric name -> value.
A fetch function takes ``(group_label, entity_id, groups)`` and returns the
fetched value, raising :class:`FetchError` when it cannot be found.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

RawMetrics = Mapping[str, Any]
RawGroups = Mapping[str, Mapping[str, RawMetrics]]
FetchFunc = Callable[[str, str, RawGroups], Any]
TransformFunc = Callable[[Any], Any]
FilterFunc = Callable[[Any, str, str, RawGroups], Any]


class FetchError(LookupError):
    """Raised when a value cannot be fetched from raw groups."""


class FetchedValues(dict):
    """Several named values produced by a single fetch."""


def from_raw(name: str) -> FetchFunc:
    """Return a fetch function reading the raw metric ``name`` of an entity."""

    def fetch(group_label: str, entity_id: str, groups: RawGroups) -> Any:
        if groups is None:
            raise FetchError(f"no raw groups to fetch {name!r} from")
        try:
            group = groups[group_label]
        except KeyError:
            raise FetchError(f"group {group_label!r} not found") from None
        try:
            entity = group[entity_id]
        except KeyError:
            raise FetchError(
                f"entity {entity_id!r} not found in group {group_label!r}"
            ) from None
        try:
            return entity[name]
        except KeyError:
            raise FetchError(
                f"metric {name!r} not found for entity {entity_id!r}"
            ) from None

    return fetch


def transform(fetch: FetchFunc, func: TransformFunc) -> FetchFunc:
    """Return a fetch function that applies ``func`` to what ``fetch`` returns."""

    def transformed(group_label: str, entity_id: str, groups: RawGroups) -> Any:
        return func(fetch(group_label, entity_id, groups))

    return transformed


def transform_and_filter(
    fetch: FetchFunc, func: TransformFunc, filter_func: FilterFunc
) -> FetchFunc:
    """Return a fetch function that transforms and then filters a value.

    The filter receives the transformed value together with the lookup
    arguments, and may raise to reject the value.
    """

    def filtered(group_label: str, entity_id: str, groups: RawGroups) -> Any:
        value = func(fetch(group_label, entity_id, groups))
        return filter_func(value, group_label, entity_id, groups)

    return filtered