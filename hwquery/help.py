"""Help text built from the query catalog"""
from typing import List

from .catalog import CATALOG, QueryCatalog, QuerySpec, ResultShape
from .errors import UnknownCommand


def usage_line(spec: QuerySpec, prog: str = "hwquery") -> str:
    parts = [prog, "[OPTIONS]", spec.command_name]
    if spec.requires_id:
        parts.append(f"<{spec.id_name}>")
    if spec.metrics:
        parts.append("[QUERY]...")
    return " ".join(parts)


def commands_overview(catalog: QueryCatalog = CATALOG) -> str:
    width = max(len(spec.command_name) for spec in catalog)
    lines = ["commands:"]
    for spec in catalog:
        lines.append(f"  {spec.command_name.ljust(width)}  {spec.help}")
    lines.append("")
    lines.append("Run `hwquery help <command>` to list the queries a command accepts.")
    return "\n".join(lines)


def command_help(name: str, catalog: QueryCatalog = CATALOG, prog: str = "hwquery") -> str:
    spec = catalog.get(name)
    if spec is None:
        raise UnknownCommand(name)

    lines: List[str] = [spec.help, "", f"Usage: {usage_line(spec, prog)}"]
    if spec.metrics:
        width = max(len(m.name) for m in spec.metrics)
        lines += ["", "Queries:"]
        for metric in spec.metrics:
            suffix = " Affected by --unit." if metric.is_bytes else ""
            lines.append(f"  {metric.name.ljust(width)}  {metric.help}{suffix}")
    elif spec.result_shape is ResultShape.LIST:
        lines += ["", "Takes no queries; entries are separated by the delimiter."]
    else:
        lines += ["", "Takes no queries; prints one `label: value` entry per item."]
    return "\n".join(lines)
