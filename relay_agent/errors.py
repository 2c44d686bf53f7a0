class AgentError(Exception):
    pass


class PayloadError(AgentError):
    """Job payload can't be decoded into printer bytes."""


class PrintError(AgentError):
    """The OS print path refused or timed out."""
