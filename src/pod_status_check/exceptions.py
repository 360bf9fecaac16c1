"""
Error types for Pod Status Check
"""


class EvaluationError(Exception):
    """Base class for errors that end a check run before a verdict is reached"""


class InvalidConfig(EvaluationError):
    """The check configuration could not be parsed"""


class InventoryUnavailable(EvaluationError):
    """The pod inventory could not be read from the cluster"""


class TransportError(Exception):
    """The run's outcome could not be delivered to the reporting service"""
