"""Exceptions raised by version resolution and its collaborators."""


class DepwatchError(Exception):
    """Base class for all depwatch errors."""


class MetadataRetrievalError(DepwatchError):
    """A metadata provider could not produce the versions for a component.

    Recoverable per component: a batch records it and moves on.
    """

    def __init__(self, coordinate: str, reason: str):
        super().__init__(f"Unable to retrieve versions for {coordinate}: {reason}")
        self.coordinate = coordinate
        self.reason = reason


class InvalidRangeSpecification(DepwatchError):
    """A configured bound or range does not parse.

    Indicates a configuration defect and aborts evaluation.
    """

    def __init__(self, spec: str, reason: str):
        super().__init__(f"Invalid version range specification '{spec}': {reason}")
        self.spec = spec
        self.reason = reason


class ConfigError(DepwatchError):
    """A configuration file is unreadable or has ill-typed values."""
