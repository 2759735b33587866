"""Snapshot resolver - evaluates parsed invocations against one refreshed snapshot"""
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from .catalog import CATALOG, QueryCatalog, QuerySpec, ResultShape
from .errors import EntityNotFound, ProviderError
from .parser import QueryInvocation
from .provider import DataProvider, Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedValue:
    """Single resolved value, tagged with the shape it was produced as.

    SCALAR values are numbers, strings or None; LIST values are a list of
    names; LABELED_LIST values are a list of (label, value) pairs.
    """
    metric: str
    value: Any
    shape: ResultShape = ResultShape.SCALAR
    is_bytes: bool = False


class SnapshotResolver:
    """Refreshes the provider once per cycle and resolves every invocation from that snapshot"""

    def __init__(self, provider: DataProvider, catalog: QueryCatalog = CATALOG):
        self.provider = provider
        self.catalog = catalog

    def subsystems_for(self, invocations: Sequence[QueryInvocation]) -> List[str]:
        return sorted({self.catalog[inv.command_name].subsystem for inv in invocations})

    def refresh(self, invocations: Sequence[QueryInvocation]) -> Snapshot:
        return self.provider.refresh(self.subsystems_for(invocations))

    def resolve(self, invocations: Sequence[QueryInvocation],
                extra_metrics: Sequence[str] = ()) -> List[List[ResolvedValue]]:
        """Refresh once and resolve all invocations.

        `extra_metrics` are resolved for every invocation after its own
        metrics, skipping ones it already requested (template placeholders).
        """
        snapshot = self.refresh(invocations)
        return [self.resolve_invocation(snapshot, inv, extra_metrics) for inv in invocations]

    def resolve_invocation(self, snapshot: Snapshot, invocation: QueryInvocation,
                           extra_metrics: Sequence[str] = ()) -> List[ResolvedValue]:
        spec = self.catalog[invocation.command_name]

        if spec.result_shape is not ResultShape.SCALAR:
            return [self._resolve_listing(snapshot, spec)]

        record = self._find_record(snapshot, spec, invocation.entity_id)
        names = list(invocation.metrics)
        names.extend(m for m in extra_metrics if m not in invocation.metrics)

        values: List[ResolvedValue] = []
        for name in names:
            metric = spec.metric(name)
            values.append(ResolvedValue(metric.name, getattr(record, metric.attribute),
                                        ResultShape.SCALAR, metric.is_bytes))
        return values

    def _find_record(self, snapshot: Snapshot, spec: QuerySpec, entity_id: Optional[str]):
        if spec.requires_id:
            record = snapshot.find(spec.entity, spec.id_name, entity_id)
            if record is None:
                raise EntityNotFound(spec.command_name, entity_id)
            return record

        record = getattr(snapshot, spec.entity)
        if record is None:
            raise ProviderError(spec.subsystem, RuntimeError("subsystem was not refreshed"))
        return record

    def _resolve_listing(self, snapshot: Snapshot, spec: QuerySpec) -> ResolvedValue:
        records = getattr(snapshot, spec.entity)
        if spec.result_shape is ResultShape.LABELED_LIST:
            pairs = [(getattr(r, spec.id_name), getattr(r, spec.list_value)) for r in records]
            return ResolvedValue(spec.command_name, pairs, ResultShape.LABELED_LIST)
        names = [getattr(r, spec.id_name) for r in records]
        return ResolvedValue(spec.command_name, names, ResultShape.LIST)
