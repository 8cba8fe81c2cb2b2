"""
Plate (Data Model)
==================
This module defines the temperature grid the simulation runs on.

Why is this file needed?
------------------------
1. Ownership: A Plate owns its numpy buffer and exposes it read-only, so a
   relaxation step can never write into the grid it is reading from.
2. Explicit dimensions: The size travels with the grid instead of being a
   global constant, which lets the same code run on small test plates.

Classes:
    Plate: Immutable square grid of temperatures indexed by (row, col).
Functions:
    init_plate: Builds the default plate with heated top and bottom rows.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

import numpy as np
import matplotlib.pyplot as plt

from hotplate.config import PLATE_SIZE, INITIAL_TEMP

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MIN_PLATE_SIZE = 3  # Smallest plate with at least one interior cell


class Plate:
    """
    Square grid of temperatures.

    Border cells represent boundary conditions, interior cells represent the
    simulated field. The underlying array is never modified after construction.
    """

    def __init__(self, values: npt.ArrayLike) -> None:
        """
        Initialize the plate from a square 2D array.

        Args:
            values: Any array-like of shape (N, N) with N >= 3. The data is
                copied, so later changes to `values` do not affect the plate.

        Raises:
            ValueError: If the array is not square 2D or smaller than 3x3.
        """
        array = np.array(values, dtype=np.float64, copy=True)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise ValueError(f"Plate must be a square 2D grid, got shape {array.shape}.")
        if array.shape[0] < MIN_PLATE_SIZE:
            raise ValueError(f"Plate size must be at least {MIN_PLATE_SIZE}, got {array.shape[0]}.")

        array.setflags(write=False)
        self._values: npt.NDArray[np.float64] = array

    @classmethod
    def from_array(cls, values: npt.ArrayLike) -> Plate:
        """Create a plate from an array-like of shape (N, N)."""
        return cls(values)

    @classmethod
    def uniform(cls, size: int, value: float) -> Plate:
        """Create a plate with every cell (borders included) set to `value`."""
        if size < MIN_PLATE_SIZE:
            raise ValueError(f"Plate size must be at least {MIN_PLATE_SIZE}, got {size}.")
        return cls(np.full((size, size), value, dtype=np.float64))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size})"

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._values[row, col])

    def __iter__(self) -> Iterator[npt.NDArray[np.float64]]:
        """Iterate over rows in order."""
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plate):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    @property
    def size(self) -> int:
        """Length and width of the plate."""
        return self._values.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return self._values.shape  # type: ignore[return-value]

    @property
    def values(self) -> npt.NDArray[np.float64]:
        """Read-only view of the whole grid."""
        return self._values

    @property
    def interior(self) -> npt.NDArray[np.float64]:
        """Read-only view of the cells that are not on the outermost rows/columns."""
        return self._values[1:-1, 1:-1]

    def equals(self, other: Plate) -> bool:
        """Exact, cell-by-cell comparison."""
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    def copy(self) -> Plate:
        """Return an independent plate with identical values."""
        return Plate(self._values)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return a writable copy of the grid."""
        return self._values.copy()

    def plot(self, title: str = "Plate temperature", show: bool = True) -> plt.Figure:
        """
        Plot the plate as a heat map.

        Args:
            title: Title of the figure.
            show: Call `plt.show()` after drawing.

        Returns:
            The matplotlib figure.
        """
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots(figsize=(6, 5))

        image = ax.imshow(self._values, cmap="jet", origin="upper", interpolation="nearest")
        fig.colorbar(image, ax=ax, label="Temperature")

        ax.set_title(title)
        ax.set_xlabel("Column")
        ax.set_ylabel("Row")

        if show:
            plt.show()
        return fig


def init_plate(size: int = PLATE_SIZE, initial_temp: float = INITIAL_TEMP) -> Plate:
    """
    Initialize the basic plate.

    Top and bottom rows, except their corner cells, are set to `initial_temp`.
    Everything else (corners, left/right columns and the interior) is 0.0.

    Args:
        size: Length and width of the plate.
        initial_temp: Temperature of the heated edges.

    Returns:
        The initialized plate.
    """
    if size < MIN_PLATE_SIZE:
        raise ValueError(f"Plate size must be at least {MIN_PLATE_SIZE}, got {size}.")

    values = np.zeros((size, size), dtype=np.float64)
    values[0, 1:-1] = initial_temp
    values[-1, 1:-1] = initial_temp

    logger.debug(f"Initialized {size}x{size} plate with edge temperature {initial_temp}")
    return Plate(values)
