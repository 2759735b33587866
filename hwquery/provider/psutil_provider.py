"""psutil-backed data provider: CPU, memory, swap, drives, sensors, network, OS"""
import logging
import platform
import socket
from pathlib import Path
from typing import Dict, List, Optional, Set

import psutil

from ..errors import ProviderError
from .base import (
    CpuInfo,
    DataProvider,
    DriveInfo,
    MemoryInfo,
    NetworkInfo,
    OsInfo,
    SensorInfo,
    Snapshot,
    SwapInfo,
)

# Seconds psutil needs between two CPU time reads for a meaningful usage figure
CPU_SAMPLE_INTERVAL = 0.2


def read_cpuinfo(path: str = "/proc/cpuinfo") -> List[Dict[str, str]]:
    """Parse /proc/cpuinfo into one dict per logical processor."""
    processors: List[Dict[str, str]] = []
    current: Dict[str, str] = {}
    try:
        with open(path, "r") as f:
            for line in f:
                if not line.strip():
                    if current:
                        processors.append(current)
                        current = {}
                    continue
                if ":" not in line:
                    continue
                key, value = line.split(":", 1)
                current[key.strip()] = value.strip()
        if current:
            processors.append(current)
    except OSError as e:
        logging.getLogger(__name__).debug(f"cpuinfo not readable ({path}): {e}")
    return processors


def read_os_release() -> Dict[str, str]:
    """Fields of /etc/os-release, empty when the file is missing."""
    try:
        return platform.freedesktop_os_release()
    except OSError:
        return {}


def block_device_attr(device: str, attr: str, sys_root: str = "/sys/class/block") -> Optional[str]:
    """Read a sysfs attribute of the whole disk holding `device` (partitions resolve to their disk)."""
    try:
        node = Path(sys_root) / Path(device).name
        if not node.exists():
            return None
        if (node / "partition").exists():
            node = node.resolve().parent
        return (node / attr).read_text().strip()
    except OSError:
        return None


class PsutilProvider(DataProvider):
    """Collects snapshots through psutil, /proc and /sys."""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 cpu_sample_interval: float = CPU_SAMPLE_INTERVAL):
        super().__init__("psutil", logger or logging.getLogger(__name__))
        self.cpu_sample_interval = cpu_sample_interval

    def refresh_snapshot(self, subsystems: Set[str]) -> Snapshot:
        snapshot = Snapshot()

        per_cpu_usage: List[float] = []
        if "cpu" in subsystems or "os" in subsystems:
            per_cpu_usage = self._guarded("cpu", self._sample_cpu_usage)

        if "cpu" in subsystems:
            snapshot.cpus = self._guarded("cpu", self._collect_cpus, per_cpu_usage)
        if "os" in subsystems:
            snapshot.os = self._guarded("os", self._collect_os, per_cpu_usage)
        if "memory" in subsystems:
            snapshot.memory = self._guarded("memory", self._collect_memory)
        if "swap" in subsystems:
            snapshot.swap = self._guarded("swap", self._collect_swap)
        if "drives" in subsystems:
            snapshot.drives = self._guarded("drives", self._collect_drives)
        if "sensors" in subsystems:
            snapshot.sensors = self._guarded("sensors", self._collect_sensors)
        if "networks" in subsystems:
            snapshot.networks = self._guarded("networks", self._collect_networks)

        return snapshot

    def _guarded(self, subsystem: str, func, *args):
        try:
            return func(*args)
        except (psutil.Error, OSError) as e:
            raise ProviderError(subsystem, e) from e

    # ---------- CPU ----------

    def _sample_cpu_usage(self) -> List[float]:
        return psutil.cpu_percent(interval=self.cpu_sample_interval, percpu=True)

    def _collect_cpus(self, per_cpu_usage: List[float]) -> List[CpuInfo]:
        freqs = psutil.cpu_freq(percpu=True) or []
        cpuinfo = read_cpuinfo()
        if not cpuinfo:
            self.logger.warning("no /proc/cpuinfo data; CPU brand and vendor will be empty")

        cpus: List[CpuInfo] = []
        for i, usage in enumerate(per_cpu_usage):
            # some platforms report a single frequency for the whole package
            freq = freqs[i] if i < len(freqs) else (freqs[0] if freqs else None)
            info = cpuinfo[i] if i < len(cpuinfo) else (cpuinfo[0] if cpuinfo else {})
            cpus.append(CpuInfo(
                name=f"cpu{i}",
                usage=float(usage),
                frequency=int(freq.current) if freq is not None else None,
                brand=info.get("model name", platform.processor()),
                vendor_id=info.get("vendor_id", ""),
            ))

        self.logger.debug(f"collected {len(cpus)} cpus")
        return cpus

    # ---------- OS ----------

    def _collect_os(self, per_cpu_usage: List[float]) -> OsInfo:
        l1, l5, l15 = psutil.getloadavg()
        release = read_os_release()
        system = platform.system()
        total_usage = sum(per_cpu_usage) / len(per_cpu_usage) if per_cpu_usage else 0.0

        return OsInfo(
            boot_time=int(psutil.boot_time()),
            load_average_1m=float(l1),
            load_average_5m=float(l5),
            load_average_15m=float(l15),
            name=release.get("NAME", system),
            kernel_version=platform.release(),
            version=release.get("VERSION_ID", ""),
            long_version=release.get("PRETTY_NAME", f"{system} {platform.release()}".strip()),
            release_id=release.get("ID", system.lower()),
            host_name=socket.gethostname(),
            physical_core_count=psutil.cpu_count(logical=False),
            total_cpu_usage=float(total_usage),
            cpu_arch=platform.machine(),
        )

    # ---------- Memory ----------

    def _collect_memory(self) -> MemoryInfo:
        vm = psutil.virtual_memory()
        return MemoryInfo(total=vm.total, available=vm.available, used=vm.used, free=vm.free)

    def _collect_swap(self) -> SwapInfo:
        sm = psutil.swap_memory()
        return SwapInfo(total=sm.total, used=sm.used, free=sm.free)

    # ---------- Drives ----------

    def _collect_drives(self) -> List[DriveInfo]:
        drives: List[DriveInfo] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except (PermissionError, FileNotFoundError) as e:
                self.logger.debug(f"skipping {part.mountpoint}: {e}")
                continue

            rotational = block_device_attr(part.device, "queue/rotational")
            kind = {"1": "HDD", "0": "SSD"}.get(rotational, "Unknown")
            drives.append(DriveInfo(
                device=part.device,
                mount_point=part.mountpoint,
                fstype=part.fstype,
                total=usage.total,
                available=usage.free,
                is_removable=block_device_attr(part.device, "removable") == "1",
                kind=kind,
            ))

        self.logger.debug(f"collected {len(drives)} drives")
        return drives

    # ---------- Sensors ----------

    def _collect_sensors(self) -> List[SensorInfo]:
        if not hasattr(psutil, "sensors_temperatures"):
            self.logger.warning("temperature sensors are not supported on this platform")
            return []

        sensors: List[SensorInfo] = []
        for chip, entries in psutil.sensors_temperatures().items():
            for entry in entries:
                label = f"{chip} {entry.label}" if entry.label else chip
                sensors.append(SensorInfo(
                    label=label,
                    current=float(entry.current),
                    high=float(entry.high) if entry.high is not None else None,
                    critical=float(entry.critical) if entry.critical is not None else None,
                ))

        self.logger.debug(f"collected {len(sensors)} sensors")
        return sensors

    # ---------- Network ----------

    def _collect_networks(self) -> List[NetworkInfo]:
        addrs = psutil.net_if_addrs()
        networks: List[NetworkInfo] = []
        for iface, counters in psutil.net_io_counters(pernic=True).items():
            mac = ""
            for addr in addrs.get(iface, []):
                if addr.family == psutil.AF_LINK:
                    mac = addr.address
                    break
            networks.append(NetworkInfo(
                interface=iface,
                mac_address=mac,
                bytes_sent=counters.bytes_sent,
                bytes_recv=counters.bytes_recv,
                packets_sent=counters.packets_sent,
                packets_recv=counters.packets_recv,
                errin=counters.errin,
                errout=counters.errout,
            ))

        self.logger.debug(f"collected {len(networks)} network interfaces")
        return networks
