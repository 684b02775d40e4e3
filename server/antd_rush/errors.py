ERROR_PREFIX = "[antd-rush]: "


class RushError(Exception):
    """Base class for errors raised by the resolution core."""

    def __init__(self, message: str):
        super().__init__(f"{ERROR_PREFIX}{message}")


class CatalogError(RushError):
    """The bundled catalog or documentation data could not be built."""


class ConsistencyError(RushError):
    """
    The catalog knows a component (or prop) but the paired documentation table
    has no record for it.

    This is a data-authoring bug, so it is raised to the caller instead of
    being turned into an empty result.
    """
