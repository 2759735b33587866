"""Pytest configuration and shared fixtures"""
import copy
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from hwquery.provider import (
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


def build_snapshot(cpu_count: int = 16) -> Snapshot:
    """Hand-built snapshot of a 16-core Linux box"""
    return Snapshot(
        os=OsInfo(
            boot_time=1699990000,
            load_average_1m=0.52,
            load_average_5m=0.61,
            load_average_15m=0.7,
            name="Arch Linux",
            kernel_version="6.6.1-arch1-1",
            version="",
            long_version="Arch Linux",
            release_id="arch",
            host_name="workstation",
            physical_core_count=8,
            total_cpu_usage=12.5,
            cpu_arch="x86_64",
        ),
        memory=MemoryInfo(total=16_000_000_000, available=8_000_000_000,
                          used=7_500_000_000, free=4_000_000_000),
        swap=SwapInfo(total=2_147_483_648, used=0, free=2_147_483_648),
        cpus=[
            CpuInfo(name=f"cpu{i}", usage=float(i), frequency=3600 + i,
                    brand="AMD Ryzen 7 5800X 8-Core Processor", vendor_id="AuthenticAMD")
            for i in range(cpu_count)
        ],
        drives=[
            DriveInfo(device="/dev/nvme0n1p2", mount_point="/", fstype="ext4",
                      total=500_000_000_000, available=200_000_000_000,
                      is_removable=False, kind="SSD"),
            DriveInfo(device="/dev/sdb1", mount_point="/mnt/usb", fstype="vfat",
                      total=32_000_000_000, available=31_000_000_000,
                      is_removable=True, kind="Unknown"),
        ],
        sensors=[
            SensorInfo(label="k10temp Tctl", current=45.125, high=None, critical=None),
            SensorInfo(label="nvme Composite", current=38.85, high=84.85, critical=89.85),
        ],
        networks=[
            NetworkInfo(interface="lo", mac_address="00:00:00:00:00:00", bytes_sent=1024,
                        bytes_recv=1024, packets_sent=10, packets_recv=10, errin=0, errout=0),
            NetworkInfo(interface="enp5s0", mac_address="a8:a1:59:12:34:56",
                        bytes_sent=2_000_000, bytes_recv=5_242_880, packets_sent=1500,
                        packets_recv=4200, errin=3, errout=1),
        ],
    )


class FakeProvider(DataProvider):
    """Provider returning copies of a fixed snapshot; total CPU usage grows by 1 per refresh"""

    def __init__(self, snapshot: Snapshot = None, fail_with: Exception = None):
        super().__init__("fake")
        self.snapshot = snapshot or build_snapshot()
        self.fail_with = fail_with
        self.requested = []

    def refresh_snapshot(self, subsystems):
        self.requested.append(sorted(subsystems))
        if self.fail_with is not None:
            raise self.fail_with
        snapshot = copy.deepcopy(self.snapshot)
        if snapshot.os is not None:
            snapshot.os.total_cpu_usage += self.refresh_count
        return snapshot


@pytest.fixture
def snapshot():
    return build_snapshot()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    """Point the default config path at an empty directory"""
    monkeypatch.setattr("hwquery.cli.DEFAULT_CONFIG_PATH", tmp_path / "missing.yml")
