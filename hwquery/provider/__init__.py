"""Hardware/OS data providers - produce point-in-time Snapshots"""

from .base import (
    SUBSYSTEMS,
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
from .psutil_provider import PsutilProvider

__all__ = [
    # Base classes
    'DataProvider',
    'Snapshot',
    'SUBSYSTEMS',

    # Snapshot records
    'OsInfo',
    'CpuInfo',
    'MemoryInfo',
    'SwapInfo',
    'DriveInfo',
    'SensorInfo',
    'NetworkInfo',

    # Providers
    'PsutilProvider',
]
