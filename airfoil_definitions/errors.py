"""Exceptions raised while constructing or generating airfoil geometry."""


class AirfoilDefinitionError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameterError(AirfoilDefinitionError, ValueError):
    """A definition parameter lies outside its valid domain."""


class InvalidFormatError(AirfoilDefinitionError, ValueError):
    """A designation string or coordinate file cannot be parsed."""


class DegenerateGeometryError(AirfoilDefinitionError, ValueError):
    """Coordinates do not describe a contour with a finite chord."""


class FitDidNotConvergeError(AirfoilDefinitionError, RuntimeError):
    """The CST least-squares fit stopped without a usable solution."""
