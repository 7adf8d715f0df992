"""Word distance algorithms, language distance estimation and matrix builds."""

from lexdist.distance.builder import (
    BuildCancelled,
    BuildFailed,
    BuildHandle,
    BuildSuccess,
    DistanceMatrixBuilder,
)
from lexdist.distance.errors import BuildCancelledError, BuildError, LanguageNotFoundError
from lexdist.distance.matrix import DistanceMatrix
from lexdist.distance.registry import available_algorithms, create_algorithm

__all__ = [
    "BuildCancelled",
    "BuildCancelledError",
    "BuildError",
    "BuildFailed",
    "BuildHandle",
    "BuildSuccess",
    "DistanceMatrix",
    "DistanceMatrixBuilder",
    "LanguageNotFoundError",
    "available_algorithms",
    "create_algorithm",
]
