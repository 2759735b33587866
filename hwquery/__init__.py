"""
hwquery - scriptable hardware and OS telemetry

Structure:
    hwquery/
    - catalog.py        # Commands and the metrics they accept
    - parser.py         # Positional tokens -> query invocations
    - provider/         # Snapshot sources
      - base.py         # Snapshot records and DataProvider base class
      - psutil_provider.py
    - resolver.py       # Invocations -> resolved values from one snapshot
    - formatter.py      # Delimiter and %placeholder% rendering
    - scheduler.py      # Repeated cycles
    - units.py          # Byte unit conversion
    - config.py         # YAML config file + CLI overrides
    - cli.py            # Command line entry point
"""

__version__ = "0.3.0"
