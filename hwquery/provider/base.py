"""Data providers base - snapshot records and the timed, error-wrapping refresh"""
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set

from ..errors import ProviderError

# Subsystems a provider knows how to refresh
SUBSYSTEMS = ("os", "cpu", "memory", "swap", "drives", "sensors", "networks")


@dataclass
class OsInfo:
    boot_time: int
    load_average_1m: float
    load_average_5m: float
    load_average_15m: float
    name: str
    kernel_version: str
    version: str
    long_version: str
    release_id: str
    host_name: str
    physical_core_count: Optional[int]
    total_cpu_usage: float
    cpu_arch: str


@dataclass
class CpuInfo:
    name: str  # cpu0, cpu1, ...
    usage: float
    frequency: Optional[int]  # MHz
    brand: str
    vendor_id: str


@dataclass
class MemoryInfo:
    total: int
    available: int
    used: int
    free: int


@dataclass
class SwapInfo:
    total: int
    used: int
    free: int


@dataclass
class DriveInfo:
    device: str
    mount_point: str
    fstype: str
    total: int
    available: int
    is_removable: bool
    kind: str  # HDD, SSD or Unknown

    @property
    def used(self) -> int:
        return self.total - self.available


@dataclass
class SensorInfo:
    label: str
    current: float
    high: Optional[float] = None
    critical: Optional[float] = None


@dataclass
class NetworkInfo:
    interface: str
    mac_address: str
    bytes_sent: int
    bytes_recv: int
    packets_sent: int
    packets_recv: int
    errin: int
    errout: int


@dataclass
class Snapshot:
    """Point-in-time read of system state; sections not refreshed stay empty"""
    os: Optional[OsInfo] = None
    memory: Optional[MemoryInfo] = None
    swap: Optional[SwapInfo] = None
    cpus: List[CpuInfo] = field(default_factory=list)
    drives: List[DriveInfo] = field(default_factory=list)
    sensors: List[SensorInfo] = field(default_factory=list)
    networks: List[NetworkInfo] = field(default_factory=list)

    def find(self, entity: str, id_name: str, entity_id: str):
        """First record of collection `entity` whose `id_name` equals `entity_id`, or None."""
        for record in getattr(self, entity):
            if getattr(record, id_name) == entity_id:
                return record
        return None


class DataProvider(ABC):
    """Base class for hardware/OS data sources"""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self.logger = logger or logging.getLogger(__name__)
        self.refresh_count = 0

    @abstractmethod
    def refresh_snapshot(self, subsystems: Set[str]) -> Snapshot:
        """Read the requested subsystems and return a new Snapshot"""

    def refresh(self, subsystems: Optional[Iterable[str]] = None) -> Snapshot:
        """Refresh `subsystems` (all when None), wrapping OS-level failures in ProviderError."""
        wanted = set(SUBSYSTEMS) if subsystems is None else set(subsystems)
        unknown = wanted.difference(SUBSYSTEMS)
        if unknown:
            raise ValueError(f"unknown subsystem(s): {', '.join(sorted(unknown))}")

        start_time = time.time()
        try:
            snapshot = self.refresh_snapshot(wanted)
        except OSError as e:
            raise ProviderError(self.name, e) from e

        self.refresh_count += 1
        self.logger.debug(f"{self.name}: refreshed {', '.join(sorted(wanted))} "
                          f"in {time.time() - start_time:.2f}s")
        return snapshot
