"""Custom exceptions for the capacity planner."""


class PlanningError(Exception):
    """Base exception for capacity planner errors."""

    pass


class ConfigError(PlanningError):
    """Configuration file is missing required values or has unknown ones."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        location = f" in '{path}'" if path else ""
        super().__init__(f"Invalid configuration{location}: {message}")


class InvalidRecordError(PlanningError):
    """An input record could not be turned into an entity."""

    def __init__(self, message: str, source: str | None = None, index: int | None = None):
        self.reason = message
        self.source = source
        self.index = index
        location = ""
        if source:
            location += f" in '{source}'"
        if index is not None:
            location += f" at record {index}"
        super().__init__(f"Invalid record{location}: {message}")


class UnknownExportFormatError(PlanningError, ValueError):
    """Requested export format is not supported."""

    def __init__(self, format_type: str, supported: list[str]):
        self.format_type = format_type
        self.supported = supported
        super().__init__(
            f"Unsupported format: {format_type}. Supported: {', '.join(supported)}"
        )
