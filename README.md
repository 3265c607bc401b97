# kubemetrics

Building blocks for turning raw Kubernetes metric data into reportable values.

The package is a library. It has no command-line entry point.

## What it contains

- `kubemetrics.fetch`: `from_raw`, `transform` and `transform_and_filter`
  build fetch functions. A fetch function takes a group label, an entity id and
  the raw groups, which are nested dicts of the form `{group: {entity: {metric: value}}}`.
  It returns the fetched value or raises `FetchError`. `FetchedValues` is a
  dict holding several named values.
- `kubemetrics.convert`: value converters. `from_nano`, `from_nano_to_milli`,
  `to_timestamp`, `to_numeric_boolean`, `to_cores`, `from_prometheus_numeric`,
  `convert_value` and `compute_percentage` cover these conversions. The
  `GaugeValue` and `CounterValue` float types are also here. Failures raise
  `ConversionError`.
- `kubemetrics.combinators`: fetch functions built from other fetch functions.
  These are `subtract`, `fetch_with_default`, `fetch_if_missing`,
  `to_utilization`, `to_complement_percentage` and `is_persistent_volume`.
  `metric_set_type_guesser_with_custom_group` returns a function that names a
  metric set after a fixed group, for example `"custom"` gives `"K8sCustomSample"`.
- `kubemetrics.cpu_filter`: `filter_cpu_used_cores` rejects CPU usage readings
  above a hundred times the container's CPU limit. A limit of 96 cores is used
  when none is set. It raises `CpuFilterError`.
- `kubemetrics.network`: `default_interface` reads a Linux route table
  (`/proc/net/route` by default) to find the default network interface. On
  other platforms it returns `"eth0"`. `find_default_interface` parses the
  table's contents. Errors raise `RouteError`.

## Example

```python
from kubemetrics.fetch import from_raw
from kubemetrics.combinators import to_utilization

raw = {"container": {"ns_pod_app": {"usageBytes": 512, "memoryLimitBytes": 1024}}}
utilization = to_utilization(from_raw("usageBytes"), from_raw("memoryLimitBytes"))
print(utilization("container", "ns_pod_app", raw))  # 50.0
```

```python
from kubemetrics.network import default_interface

print(default_interface("/proc/net/route"))
```

## What it does not do

The package works on raw metric data that is already in memory. It does not
scrape kubelet, kube-state-metrics or control-plane endpoints, and it holds no
definitions of which series to query. It does not send or store the values it
computes.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```