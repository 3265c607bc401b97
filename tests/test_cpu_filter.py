import pytest

from kubemetrics.convert import ConversionError, GaugeValue, from_nano
from kubemetrics.cpu_filter import CpuFilterError, filter_cpu_used_cores
from kubemetrics.fetch import from_raw, transform_and_filter


def _groups(metrics):
    return {"test": {"entity_id_1": metrics}}


def test_invalid_fetched_value_type():
    groups = _groups({"raw_metric_name_1": "dummy_val"})
    with pytest.raises(CpuFilterError, match="^fetchedValue must be of type float64$"):
        filter_cpu_used_cores(21412412, "dummyLabel", "entity_id_1", groups)


def test_gauge_value_is_not_a_plain_float():
    groups = _groups({"cpuLimitCores": 8000})
    with pytest.raises(CpuFilterError, match="^fetchedValue must be of type float64$"):
        filter_cpu_used_cores(GaugeValue(2.0), "test", "entity_id_1", groups)


def test_group_label_not_found():
    groups = _groups({"raw_metric_name_1": "dummy_val"})
    with pytest.raises(CpuFilterError, match="^group label not found$"):
        filter_cpu_used_cores(2.09, "dummyLabel", "entity_id_1", groups)


def test_group_entity_not_found():
    groups = _groups({"raw_metric_name_1": "dummy_val"})
    with pytest.raises(CpuFilterError, match="^entity Id not found$"):
        filter_cpu_used_cores(2.09, "test", "dummyEntity", groups)


def test_cpu_limit_cores_not_found_uses_default():
    groups = _groups({"raw_metric_name_1": "dummy_val"})
    assert filter_cpu_used_cores(21.434, "test", "entity_id_1", groups) == 21.434


def test_default_limit_still_rejects_absurd_values():
    groups = _groups({"raw_metric_name_1": "dummy_val"})
    with pytest.raises(CpuFilterError, match="impossibly high"):
        filter_cpu_used_cores(9600.5, "test", "entity_id_1", groups)


def test_cpu_limit_cores_transform_error():
    groups = _groups({"cpuLimitCores": "dummy_val"})
    with pytest.raises(ConversionError, match="^error transforming to cores$"):
        filter_cpu_used_cores(2.09, "test", "entity_id_1", groups)


def test_impossibly_high_cpu_cores_error():
    groups = _groups({"cpuLimitCores": 200})
    with pytest.raises(
        CpuFilterError,
        match="^impossibly high value received from kubelet for cpuUsedCoresVal$",
    ):
        filter_cpu_used_cores(2141241241241113445.121, "test", "entity_id_1", groups)


def test_valid_cpu_used_cores_value():
    groups = _groups({"cpuLimitCores": 8000})
    assert filter_cpu_used_cores(2.09, "test", "entity_id_1", groups) == 2.09


def test_value_exactly_at_threshold_is_accepted():
    groups = _groups({"cpuLimitCores": 1000})
    assert filter_cpu_used_cores(100.0, "test", "entity_id_1", groups) == 100.0


def test_combined_with_transform_and_filter_accepts_plausible_usage():
    groups = {
        "container": {
            "c1": {"usageNanoCores": 500_000_000, "cpuLimitCores": 1000},
        }
    }
    fetch = transform_and_filter(
        from_raw("usageNanoCores"), from_nano, filter_cpu_used_cores
    )
    assert fetch("container", "c1", groups) == 0.5


def test_combined_with_transform_and_filter_rejects_absurd_usage():
    groups = {
        "container": {
            "c1": {"usageNanoCores": 1_000_000_000, "cpuLimitCores": 1},
        }
    }
    fetch = transform_and_filter(
        from_raw("usageNanoCores"), from_nano, filter_cpu_used_cores
    )
    with pytest.raises(CpuFilterError, match="impossibly high"):
        fetch("container", "c1", groups)