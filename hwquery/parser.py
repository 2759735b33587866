"""Command parser - turns positional tokens into query invocations.

Tokens are scanned left to right. A token naming a known command opens a new
invocation; commands that need an id consume the next token; everything up to
the next command name is a metric of the current invocation.

    memory total available cpu cpu0 usage
    -> [memory(total, available), cpu[cpu0](usage)]

Command names win over metric names, so a metric token that is also the name
of a command always closes the current invocation.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .catalog import CATALOG, QueryCatalog
from .errors import MissingRequiredId, UnknownCommand, UnknownMetric, UnknownPlaceholder

logger = logging.getLogger(__name__)

# %name% specifiers; `%%` yields an empty name and renders a literal percent sign
PLACEHOLDER_RE = re.compile(r"%(.*?)%")


@dataclass(frozen=True)
class QueryInvocation:
    """One parsed user request"""
    command_name: str
    entity_id: Optional[str] = None
    metrics: Tuple[str, ...] = ()


def parse_invocations(tokens: Sequence[str], catalog: QueryCatalog = CATALOG) -> List[QueryInvocation]:
    """Split `tokens` into invocations validated against `catalog`."""
    if not tokens:
        raise UnknownCommand("")

    invocations: List[QueryInvocation] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        spec = catalog.get(token)
        if spec is None:
            # only reachable before the first command
            raise UnknownCommand(token)
        i += 1

        entity_id = None
        if spec.requires_id:
            if i >= len(tokens) or tokens[i] in catalog:
                raise MissingRequiredId(spec.command_name)
            entity_id = tokens[i]
            i += 1

        metrics: List[str] = []
        while i < len(tokens) and tokens[i] not in catalog:
            name = tokens[i]
            if not spec.has_metric(name):
                raise UnknownMetric(spec.command_name, name)
            metrics.append(name.lower())
            i += 1

        invocations.append(QueryInvocation(spec.command_name, entity_id, tuple(metrics)))

    logger.debug("parsed %d invocation(s): %s", len(invocations), invocations)
    return invocations


def extract_placeholders(template: str) -> List[str]:
    """Names of all `%name%` specifiers in order, lower-cased, without `%%` escapes."""
    return [m.group(1).lower() for m in PLACEHOLDER_RE.finditer(template) if m.group(1)]


def validate_template(template: str, invocations: Sequence[QueryInvocation],
                      catalog: QueryCatalog = CATALOG) -> List[str]:
    """Check that every specifier in `template` is a metric of every invocation's command.

    Returns the de-duplicated placeholder names in order of first appearance.
    """
    names = list(dict.fromkeys(extract_placeholders(template)))
    for inv in invocations:
        spec = catalog[inv.command_name]
        for name in names:
            if not spec.has_metric(name):
                raise UnknownPlaceholder(spec.command_name, name)
    return names
