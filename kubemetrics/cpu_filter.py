"""Sanity filter for the CPU usage reported by the kubelet.

The kubelet stats summary sometimes reports impossibly high ``usageNanoCores``
values. This filter rejects a used-cores value above one hundred times the
container's CPU limit, or above that of a 96-core default when no limit is set.
"""

from __future__ import annotations

import logging
from typing import Any

from kubemetrics.convert import CounterValue, GaugeValue, to_cores
from kubemetrics.fetch import RawGroups

logger = logging.getLogger(__name__)

# 96 cores in Kubernetes millicore units; used when a container sets no CPU limit.
DEFAULT_CPU_LIMIT_MILLICORES = 96_000
_MAX_USAGE_TO_LIMIT_RATIO = 100


class CpuFilterError(ValueError):
    """Raised when a used-cores value is rejected by the filter."""


def _is_plain_float(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, (GaugeValue, CounterValue))


def filter_cpu_used_cores(
    fetched_value: Any, group_label: str, entity_id: str, groups: RawGroups
) -> float:
    """Return ``fetched_value`` if it is a plausible number of used CPU cores.

    The entity's raw ``cpuLimitCores`` (in millicores) is looked up in
    ``groups``. :class:`CpuFilterError` is raised for a non-float value, a
    missing group or entity, or a value above a hundred times the limit; a
    limit that cannot be converted raises
    :class:`~kubemetrics.convert.ConversionError`.
    """
    if not _is_plain_float(fetched_value):
        raise CpuFilterError("fetchedValue must be of type float64")

    try:
        group = groups[group_label]
    except (KeyError, TypeError):
        raise CpuFilterError("group label not found") from None

    try:
        entity = group[entity_id]
    except KeyError:
        raise CpuFilterError("entity Id not found") from None

    if "cpuLimitCores" in entity:
        limit_millicores = entity["cpuLimitCores"]
    else:
        logger.debug("cpuLimitCores metric not available. using default max 96 cores")
        limit_millicores = DEFAULT_CPU_LIMIT_MILLICORES

    cpu_limit = to_cores(limit_millicores)

    if fetched_value > cpu_limit * _MAX_USAGE_TO_LIMIT_RATIO:
        raise CpuFilterError(
            "impossibly high value received from kubelet for cpuUsedCoresVal"
        )

    return fetched_value