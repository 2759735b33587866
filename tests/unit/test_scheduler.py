"""Unit tests for the cycle scheduler"""
import io

import pytest

from hwquery.config import OutputConfig, ScheduleConfig
from hwquery.errors import EntityNotFound
from hwquery.formatter import OutputFormatter
from hwquery.parser import parse_invocations
from hwquery.resolver import SnapshotResolver
from hwquery.scheduler import Scheduler


def make_scheduler(provider, tokens, schedule=ScheduleConfig(), output=OutputConfig(),
                   placeholders=(), sleeps=None):
    out = io.StringIO()
    scheduler = Scheduler(
        parse_invocations(tokens),
        SnapshotResolver(provider),
        OutputFormatter(output),
        schedule,
        placeholders=placeholders,
        out=out,
        sleep=(sleeps.append if sleeps is not None else lambda s: None),
    )
    return scheduler, out


class TestSchedulerLoop:

    def test_single_cycle_by_default(self, provider):
        scheduler, out = make_scheduler(provider, ["memory", "total", "available"])
        assert scheduler.run() == 1
        assert out.getvalue() == "16000000000\n8000000000\n"

    def test_repeats_with_sleep_between_cycles_only(self, provider):
        sleeps = []
        scheduler, out = make_scheduler(provider, ["os", "total-cpu-usage"],
                                        schedule=ScheduleConfig(repeat_count=3, interval=1.0),
                                        sleeps=sleeps)
        assert scheduler.run() == 3
        assert sleeps == [1.0, 1.0]
        assert out.getvalue().splitlines() == ["12.50", "13.50", "14.50"]
        assert provider.refresh_count == 3

    def test_zero_interval_never_sleeps(self, provider):
        sleeps = []
        scheduler, _ = make_scheduler(provider, ["list-cpus"],
                                      schedule=ScheduleConfig(repeat_count=4), sleeps=sleeps)
        scheduler.run()
        assert sleeps == []

    def test_template_cycle(self, provider):
        output = OutputConfig(format_template="%brand%")
        scheduler, out = make_scheduler(provider, ["cpu", "cpu0", "cpu", "cpu1"],
                                        output=output, placeholders=["brand"])
        assert scheduler.run_cycle() == ["AMD Ryzen 7 5800X 8-Core Processor"] * 2
        assert len(out.getvalue().splitlines()) == 2


class TestSchedulerErrors:

    def test_failure_aborts_run(self, provider):
        sleeps = []
        scheduler, out = make_scheduler(provider, ["drive", "/dev/sda3", "fs"],
                                        schedule=ScheduleConfig(repeat_count=5, interval=0.5),
                                        sleeps=sleeps)
        with pytest.raises(EntityNotFound):
            scheduler.run()
        assert out.getvalue() == ""
        assert sleeps == []
        assert provider.refresh_count == 1

    def test_earlier_output_is_kept(self, provider):
        scheduler, out = make_scheduler(provider, ["network", "enp5s0", "mac-address"],
                                        schedule=ScheduleConfig(repeat_count=3))
        real_resolve = scheduler.resolver.resolve
        calls = []

        def flaky_resolve(invocations, extra=()):
            calls.append(1)
            if len(calls) == 2:
                raise EntityNotFound("network", "enp5s0")
            return real_resolve(invocations, extra)

        scheduler.resolver.resolve = flaky_resolve
        with pytest.raises(EntityNotFound):
            scheduler.run()
        assert out.getvalue() == "a8:a1:59:12:34:56\n"
