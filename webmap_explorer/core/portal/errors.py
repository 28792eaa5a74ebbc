"""
Portal error taxonomy.

All portal failures are transient and non-fatal; adapters translate
transport, payload and validation failures into one of these.
"""


class PortalError(Exception):
    """Base class for failures talking to the portal."""


class PortalConnectionError(PortalError):
    """Session creation failed (network or portal unreachable)."""


class QueryError(PortalError):
    """A catalog search was rejected or could not be executed."""


class LoadError(PortalError):
    """A portal item could not be resolved into a renderable map."""
