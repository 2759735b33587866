"""Scheduler - repeats the resolve/format/print cycle"""
import logging
import sys
import time
from typing import Callable, List, Optional, Sequence, TextIO

from .config import ScheduleConfig
from .formatter import OutputFormatter
from .parser import QueryInvocation
from .resolver import SnapshotResolver

logger = logging.getLogger(__name__)


class Scheduler:
    """Runs a parsed plan `repeat_count` times, sleeping `interval` between cycles."""

    def __init__(self, invocations: Sequence[QueryInvocation], resolver: SnapshotResolver,
                 formatter: OutputFormatter, schedule: ScheduleConfig,
                 placeholders: Sequence[str] = (), out: Optional[TextIO] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        self.invocations = list(invocations)
        self.resolver = resolver
        self.formatter = formatter
        self.schedule = schedule
        self.placeholders = list(placeholders)
        self.out = out
        self.sleep = sleep or time.sleep

    def run_cycle(self) -> List[str]:
        """Refresh, resolve and render once; returns the printed lines."""
        start_time = time.time()
        results = self.resolver.resolve(self.invocations, self.placeholders)
        lines = self.formatter.render([inv.command_name for inv in self.invocations], results)

        out = self.out or sys.stdout
        for line in lines:
            print(line, file=out)
        out.flush()

        logger.debug("cycle done in %.2fs, %d line(s)", time.time() - start_time, len(lines))
        return lines

    def run(self) -> int:
        """Run every cycle; errors propagate and stop the loop. Returns the number of cycles run."""
        cycles = 0
        for i in range(self.schedule.repeat_count):
            if i > 0 and self.schedule.interval > 0:
                self.sleep(self.schedule.interval)
            self.run_cycle()
            cycles += 1
        return cycles
