from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from hotplate.config import HEAT_EPSILON
from hotplate.model.plate import Plate

if TYPE_CHECKING:
    import numpy.typing as npt

PlateLike = Union[Plate, "npt.NDArray[np.float64]"]


def _as_array(grid: PlateLike) -> npt.NDArray[np.float64]:
    if isinstance(grid, Plate):
        return grid.values
    return np.asarray(grid, dtype=np.float64)


def _check_same_shape(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> None:
    if a.shape != b.shape:
        raise ValueError(f"Grid shapes differ: {a.shape} vs {b.shape}.")


def update_temps(
    plate: PlateLike,
    out: Optional[npt.NDArray[np.float64]] = None,
) -> Plate | npt.NDArray[np.float64]:
    """
    Compute one Jacobi relaxation step.

    Every interior cell of the result is the mean of its four direct
    neighbours (up, down, left, right) in the input. The input is not modified.

    Args:
        plate: Input grid.
        out: Optional writable array of the same shape. When given, only its
            interior is overwritten and its border cells are left untouched.

    Returns:
        A new Plate with the input's border cells when `out` is None,
        otherwise `out` itself.
    """
    source = _as_array(plate)

    if out is None:
        target = source.copy()
    else:
        _check_same_shape(source, out)
        target = out

    target[1:-1, 1:-1] = (
        source[:-2, 1:-1]    # top neighbour
        + source[1:-1, :-2]  # left neighbour
        + source[1:-1, 2:]   # right neighbour
        + source[2:, 1:-1]   # bottom neighbour
    ) / 4

    if out is None:
        return Plate(target)
    return out


def max_change(old: PlateLike, new: PlateLike) -> float:
    """Largest absolute difference between interior cells of two grids."""
    a, b = _as_array(old), _as_array(new)
    _check_same_shape(a, b)
    return float(np.max(np.abs(b[1:-1, 1:-1] - a[1:-1, 1:-1])))


def first_change(
    old: PlateLike,
    new: PlateLike,
    epsilon: float = HEAT_EPSILON,
) -> tuple[int, int] | None:
    """
    Find the first interior cell, in row-major order, that changed by more than epsilon.

    Returns:
        (row, col) in full-grid coordinates, or None if nothing changed.
    """
    if epsilon < 0:
        raise ValueError(f"Epsilon must be non-negative, got {epsilon}.")
    a, b = _as_array(old), _as_array(new)
    _check_same_shape(a, b)

    changed = np.abs(b[1:-1, 1:-1] - a[1:-1, 1:-1]) > epsilon
    # argmax on a flattened C-ordered mask gives the first True in row-major order
    flat_index = int(np.argmax(changed))
    if not changed.flat[flat_index]:
        return None
    row, col = np.unravel_index(flat_index, changed.shape)
    return int(row) + 1, int(col) + 1


def state_changed(old: PlateLike, new: PlateLike, epsilon: float = HEAT_EPSILON) -> bool:
    """
    Return True if one or more interior values changed by more than epsilon.

    Border cells are not examined.
    """
    return first_change(old, new, epsilon) is not None


def transfer_values(source: PlateLike, destination: npt.NDArray[np.float64]) -> None:
    """
    Copy every value of the source grid, borders included, into the destination array.
    """
    values = _as_array(source)
    _check_same_shape(values, destination)
    np.copyto(destination, values)
