class CostSurfaceError(Exception):
    """The base exception for errors in cost_surface."""


class GridDataError(CostSurfaceError):
    """Raised if there is a problem with the data in a grid."""


class DimensionsError(CostSurfaceError):
    """Raised if there is a problem with the dimensions of a grid."""
