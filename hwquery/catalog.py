"""Query catalog - static registry of commands and the metrics they accept"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class ResultShape(Enum):
    SCALAR = "scalar"
    LIST = "list"
    LABELED_LIST = "labeled-list"


@dataclass(frozen=True)
class MetricSpec:
    """Single metric a command can report"""
    name: str
    attribute: str
    help: str = ""
    is_bytes: bool = False


@dataclass(frozen=True)
class QuerySpec:
    """Static descriptor of one command"""
    command_name: str
    result_shape: ResultShape
    subsystem: str
    help: str = ""
    requires_id: bool = False
    entity: Optional[str] = None  # snapshot attribute holding the record or collection
    id_name: str = "name"  # entity attribute matched against the id
    list_value: Optional[str] = None  # entity attribute paired with id_name in labeled lists
    metrics: Tuple[MetricSpec, ...] = ()
    _by_name: Dict[str, MetricSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_by_name", {m.name: m for m in self.metrics})

    @property
    def valid_metrics(self) -> List[str]:
        return [m.name for m in self.metrics]

    def has_metric(self, name: str) -> bool:
        return name.lower() in self._by_name

    def metric(self, name: str) -> MetricSpec:
        return self._by_name[name.lower()]


class QueryCatalog:
    """Case-insensitive mapping of command name to QuerySpec"""

    def __init__(self, specs):
        self._specs: Dict[str, QuerySpec] = {}
        for spec in specs:
            key = spec.command_name.lower()
            if key in self._specs:
                raise ValueError(f"duplicate command: {spec.command_name}")
            self._specs[key] = spec

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._specs

    def __iter__(self) -> Iterator[QuerySpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def get(self, name: str) -> Optional[QuerySpec]:
        return self._specs.get(name.lower())

    def __getitem__(self, name: str) -> QuerySpec:
        return self._specs[name.lower()]


def _m(name: str, help: str, is_bytes: bool = False, attribute: Optional[str] = None) -> MetricSpec:
    return MetricSpec(name, attribute or name.replace("-", "_"), help, is_bytes)


OS_METRICS = (
    _m("boot-time", "Time when the system booted since UNIX epoch (seconds)."),
    _m("load-average-1m", "Load average within 1 minute, 2 decimal places."),
    _m("load-average-5m", "Load average within 5 minutes, 2 decimal places."),
    _m("load-average-15m", "Load average within 15 minutes, 2 decimal places."),
    _m("name", "The name of the OS."),
    _m("kernel-version", "The kernel version."),
    _m("version", "The OS version. Empty if not available."),
    _m("long-version", "The long OS version (e.g. \"Ubuntu 22.04.4 LTS\")."),
    _m("release-id", "The os-release ID."),
    _m("host-name", "Host name of the machine."),
    _m("physical-core-count", "Count of physical cores. Empty if not available."),
    _m("total-cpu-usage", "Total CPU usage (percentage, 2 decimal places)."),
    _m("cpu-arch", "CPU architecture (e.g. x86_64, aarch64)."),
)

CPU_METRICS = (
    _m("usage", "CPU usage (percentage, 2 decimal places)."),
    _m("frequency", "Current frequency of the CPU in MHz."),
    _m("brand", "The brand of the CPU (e.g. \"Intel(R) Core(TM) i9-9900K CPU @ 3.60GHz\")."),
    _m("vendor-id", "ID of the CPU's vendor (e.g. \"GenuineIntel\")."),
)

MEMORY_METRICS = (
    _m("usage", "Total memory usage.", is_bytes=True, attribute="used"),
    _m("total", "Total memory capacity.", is_bytes=True),
    _m("available", "Memory that can be given to processes without swapping.", is_bytes=True),
    _m("free", "Unallocated memory.", is_bytes=True),
)

SWAP_METRICS = (
    _m("usage", "Total swap usage.", is_bytes=True, attribute="used"),
    _m("total", "Total swap capacity.", is_bytes=True),
    _m("available", "Available swap memory.", is_bytes=True, attribute="free"),
)

DRIVE_METRICS = (
    _m("usage", "Total used drive space.", is_bytes=True, attribute="used"),
    _m("fs", "Drive's filesystem name.", attribute="fstype"),
    _m("is-removable", "Whether the drive is removable (1 or 0)."),
    _m("kind", "The kind of the drive (HDD, SSD or Unknown)."),
    _m("mount-point", "The path where the drive is mounted."),
    _m("total", "Total space.", is_bytes=True),
    _m("available", "Total available space.", is_bytes=True),
)

SENSOR_METRICS = (
    _m("critical-temp", "Critical temperature (Celsius, 2 decimal places). Empty if not available.",
       attribute="critical"),
    _m("max-temp", "High temperature threshold (Celsius, 2 decimal places). Empty if not available.",
       attribute="high"),
    _m("temperature", "Current temperature (Celsius, 2 decimal places).", attribute="current"),
)

NETWORK_METRICS = (
    _m("mac-address", "MAC address associated with the interface."),
    _m("total-incoming-errors", "Total number of incoming errors.", attribute="errin"),
    _m("total-outcoming-errors", "Total number of outgoing errors.", attribute="errout"),
    _m("total-received-data", "Total amount of received data.", is_bytes=True, attribute="bytes_recv"),
    _m("total-transmitted-data", "Total amount of transmitted data.", is_bytes=True,
       attribute="bytes_sent"),
    _m("total-received-packets", "Total number of received packets.", attribute="packets_recv"),
    _m("total-transmitted-packets", "Total number of transmitted packets.", attribute="packets_sent"),
)


DEFAULT_SPECS = (
    QuerySpec("os", ResultShape.SCALAR, "os", "Query general OS information.",
              entity="os", metrics=OS_METRICS),
    QuerySpec("cpu", ResultShape.SCALAR, "cpu", "Query a specific CPU (see list-cpus).",
              requires_id=True, entity="cpus", metrics=CPU_METRICS),
    QuerySpec("memory", ResultShape.SCALAR, "memory", "Query RAM.",
              entity="memory", metrics=MEMORY_METRICS),
    QuerySpec("swap", ResultShape.SCALAR, "swap", "Query swap space.",
              entity="swap", metrics=SWAP_METRICS),
    QuerySpec("drive", ResultShape.SCALAR, "drives", "Query a mounted drive by device path.",
              requires_id=True, entity="drives", id_name="device", metrics=DRIVE_METRICS),
    QuerySpec("sensor", ResultShape.SCALAR, "sensors", "Query a temperature sensor (see list-sensors).",
              requires_id=True, entity="sensors", id_name="label", metrics=SENSOR_METRICS),
    QuerySpec("network", ResultShape.SCALAR, "networks", "Query a network interface (see list-networks).",
              requires_id=True, entity="networks", id_name="interface", metrics=NETWORK_METRICS),
    QuerySpec("list-cpus", ResultShape.LIST, "cpu", "List all available CPUs.", entity="cpus"),
    QuerySpec("list-sensors", ResultShape.LIST, "sensors", "List all available sensors.",
              entity="sensors", id_name="label"),
    QuerySpec("list-networks", ResultShape.LIST, "networks", "List all available network interfaces.",
              entity="networks", id_name="interface"),
    QuerySpec("list-drives", ResultShape.LIST, "drives", "List all mounted drives.",
              entity="drives", id_name="device"),
    QuerySpec("temperatures", ResultShape.LABELED_LIST, "sensors",
              "Print every sensor with its current temperature.",
              entity="sensors", id_name="label", list_value="current"),
    QuerySpec("cpu-usages", ResultShape.LABELED_LIST, "cpu",
              "Print every CPU with its current usage.", entity="cpus", list_value="usage"),
)

CATALOG = QueryCatalog(DEFAULT_SPECS)
