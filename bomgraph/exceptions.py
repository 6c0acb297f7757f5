"""
Exception hierarchy

Only schema construction failures are fatal. Malformed input is skipped with a
warning, reasoner failures become error reports and cache misses return None.
"""


class BomGraphError(Exception):
    """Base class for bomgraph errors"""


class SchemaBuildError(BomGraphError):
    """Schema construction failed (dependency declared out of order, etc.)

    Not retryable within the same build attempt.
    """


class UnknownClassError(BomGraphError, KeyError):
    """Class name not declared in the schema"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown class: {self.name}"


class UnknownPropertyError(BomGraphError, KeyError):
    """Property name not declared in the schema"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown property: {self.name}"


class ReasonerTimeoutError(BomGraphError):
    """Reasoner call exceeded its timeout (converted to an error report)"""
