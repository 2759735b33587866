"""Error taxonomy for hwquery.

Each error class carries its own process exit code so the CLI can map any
failure to a distinct status without inspecting messages.
"""


class HwQueryError(Exception):
    """Base class for all errors reported to the user"""
    exit_code = 1


class InvalidFlagValue(HwQueryError):
    """Bad delimiter, unit, interval or count value"""
    exit_code = 2

    def __init__(self, flag: str, value, reason: str = ""):
        self.flag = flag
        self.value = value
        msg = f"invalid value `{value}` for {flag}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class UnknownCommand(HwQueryError):
    exit_code = 3

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"unknown command `{token}`")


class UnknownMetric(HwQueryError):
    exit_code = 4

    def __init__(self, command: str, metric: str):
        self.command = command
        self.metric = metric
        super().__init__(f"invalid {command} query `{metric}`")


class MissingRequiredId(HwQueryError):
    exit_code = 5

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"command `{command}` requires a name argument")


class EntityNotFound(HwQueryError):
    exit_code = 6

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} `{entity_id}` not found")


class UnknownPlaceholder(HwQueryError):
    exit_code = 7

    def __init__(self, command: str, name: str):
        self.command = command
        self.name = name
        super().__init__(f"unknown format specifier `%{name}%` for command `{command}`")


class ProviderError(HwQueryError):
    """The underlying data source failed to refresh"""
    exit_code = 8

    def __init__(self, subsystem: str, cause: Exception):
        self.subsystem = subsystem
        self.cause = cause
        super().__init__(f"failed to read {subsystem} data: {cause}")
