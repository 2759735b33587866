"""Output formatter - delimiter-joined values or %placeholder% templates"""
from typing import Any, Dict, List, Sequence

from .catalog import ResultShape
from .config import OutputConfig
from .errors import UnknownPlaceholder
from .parser import PLACEHOLDER_RE
from .resolver import ResolvedValue
from .units import DataUnit, format_bytes


def format_value(value: Any, is_bytes: bool = False, unit: DataUnit = DataUnit.BYTES) -> str:
    """Render one scalar: ints as-is, floats with 2 decimals, bools as 1/0, None as empty."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if is_bytes:
        return format_bytes(value, unit)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def flatten(resolved: ResolvedValue, unit: DataUnit = DataUnit.BYTES) -> List[str]:
    """Rows for one resolved value; listings produce one row per entry."""
    if resolved.shape is ResultShape.LIST:
        return [format_value(v) for v in resolved.value]
    if resolved.shape is ResultShape.LABELED_LIST:
        return [f"{label}: {format_value(v)}" for label, v in resolved.value]
    return [format_value(resolved.value, resolved.is_bytes, unit)]


def render_delimited(results: Sequence[Sequence[ResolvedValue]], delimiter: str = "\n",
                     unit: DataUnit = DataUnit.BYTES) -> List[str]:
    rows: List[str] = []
    for values in results:
        for resolved in values:
            rows.extend(flatten(resolved, unit))
    if not rows:
        return []
    return [delimiter.join(rows)]


def render_template(template: str, command: str, values: Sequence[ResolvedValue],
                    unit: DataUnit = DataUnit.BYTES) -> str:
    """Substitute `%name%` specifiers with this invocation's values; `%%` becomes `%`."""
    ctx: Dict[str, str] = {}
    for resolved in values:
        if resolved.shape is ResultShape.SCALAR:
            ctx[resolved.metric.lower()] = format_value(resolved.value, resolved.is_bytes, unit)

    def _sub(match) -> str:
        name = match.group(1)
        if not name:
            return "%"
        try:
            return ctx[name.lower()]
        except KeyError:
            raise UnknownPlaceholder(command, name) from None

    return PLACEHOLDER_RE.sub(_sub, template)


class OutputFormatter:
    """Renders one cycle's results according to OutputConfig"""

    def __init__(self, config: OutputConfig):
        self.config = config

    @property
    def template_mode(self) -> bool:
        return self.config.format_template is not None

    def render(self, commands: Sequence[str], results: Sequence[Sequence[ResolvedValue]]) -> List[str]:
        """Output lines for one cycle; `commands` names the invocation of each result row."""
        if self.template_mode:
            return [render_template(self.config.format_template, command, values, self.config.unit)
                    for command, values in zip(commands, results)]
        return render_delimited(results, self.config.delimiter, self.config.unit)
