from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st
from hypothesis.extra.numpy import arrays

from hotplate.model.plate import Plate
from hotplate.solvers.relaxation import (
    first_change,
    max_change,
    state_changed,
    transfer_values,
    update_temps,
)

sizes = st.integers(min_value=3, max_value=12)
temperatures = st.floats(min_value=-1.0e6, max_value=1.0e6, allow_nan=False, allow_infinity=False)


@st.composite
def plates(draw) -> Plate:
    size = draw(sizes)
    return Plate(draw(arrays(np.float64, (size, size), elements=temperatures)))


class TestUpdateTemps:
    """Cover the relaxation step so every interior cell becomes the mean of its neighbours."""

    def test_first_step_from_default_plate(self, default_plate: Plate) -> None:
        new = update_temps(default_plate)

        assert new[1, 1] == pytest.approx(25.0)
        assert new[1, 5] == pytest.approx(25.0)
        assert new[8, 4] == pytest.approx(25.0)
        assert new[4, 4] == 0.0

    def test_does_not_modify_input(self, default_plate: Plate) -> None:
        before = default_plate.to_array()

        update_temps(default_plate)

        assert np.array_equal(default_plate.values, before)

    def test_neighbour_average_on_small_grid(self) -> None:
        plate = Plate(
            np.array(
                [
                    [0.0, 4.0, 0.0],
                    [8.0, 100.0, 12.0],
                    [0.0, 16.0, 0.0],
                ]
            )
        )

        assert update_temps(plate)[1, 1] == 10.0

    @given(plate=plates())
    def test_border_cells_never_change(self, plate: Plate) -> None:
        new = update_temps(plate)

        assert np.array_equal(new.values[0, :], plate.values[0, :])
        assert np.array_equal(new.values[-1, :], plate.values[-1, :])
        assert np.array_equal(new.values[:, 0], plate.values[:, 0])
        assert np.array_equal(new.values[:, -1], plate.values[:, -1])

    @given(plate=plates(), sentinel=temperatures)
    def test_out_buffer_keeps_its_own_border(self, plate: Plate, sentinel: float) -> None:
        out = np.full(plate.shape, sentinel)

        result = update_temps(plate, out=out)

        assert result is out
        assert np.all(out[0, :] == sentinel)
        assert np.all(out[-1, :] == sentinel)
        assert np.all(out[:, 0] == sentinel)
        assert np.all(out[:, -1] == sentinel)
        assert np.array_equal(out[1:-1, 1:-1], update_temps(plate).interior)

    @given(size=sizes, value=st.integers(min_value=-100000, max_value=100000))
    def test_uniform_plate_is_fixed_point(self, size: int, value: int) -> None:
        plate = Plate.uniform(size, float(value))

        assert update_temps(plate) == plate

    def test_out_buffer_shape_must_match(self, default_plate: Plate) -> None:
        with pytest.raises(ValueError, match="shapes differ"):
            update_temps(default_plate, out=np.zeros((5, 5)))


class TestStateChanged:
    """Validate the convergence check so the driver stops exactly when the field settles."""

    @given(plate=plates(), epsilon=st.floats(min_value=0.0, max_value=1.0e3))
    def test_identical_plates_have_not_changed(self, plate: Plate, epsilon: float) -> None:
        assert state_changed(plate, plate.copy(), epsilon) is False

    @given(
        size=sizes,
        epsilon=st.floats(min_value=0.0, max_value=1.0e3),
        data=st.data(),
    )
    def test_single_interior_difference_is_detected(self, size: int, epsilon: float, data) -> None:
        row = data.draw(st.integers(min_value=1, max_value=size - 2))
        col = data.draw(st.integers(min_value=1, max_value=size - 2))
        old = Plate.uniform(size, 0.0)
        changed = old.to_array()
        changed[row, col] = epsilon + 1.0

        assert state_changed(old, Plate(changed), epsilon) is True
        assert first_change(old, Plate(changed), epsilon) == (row, col)

    def test_difference_equal_to_epsilon_is_not_a_change(self) -> None:
        old = Plate.uniform(4, 0.0)
        new = old.to_array()
        new[1, 1] = 0.5

        assert state_changed(old, Plate(new), epsilon=0.5) is False

    def test_border_differences_are_ignored(self) -> None:
        old = Plate.uniform(5, 0.0)
        new = old.to_array()
        new[0, 2] = 1000.0
        new[4, 4] = -1000.0

        assert state_changed(old, Plate(new), epsilon=0.1) is False

    def test_first_change_scans_row_major(self) -> None:
        old = Plate.uniform(5, 0.0)
        new = old.to_array()
        new[3, 1] = 5.0
        new[2, 3] = 5.0

        assert first_change(old, Plate(new), epsilon=0.1) == (2, 3)

    def test_rejects_negative_epsilon(self, default_plate: Plate) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            state_changed(default_plate, default_plate, epsilon=-0.1)

    def test_max_change_reports_largest_interior_difference(self, default_plate: Plate) -> None:
        assert max_change(default_plate, update_temps(default_plate)) == pytest.approx(25.0)


class TestTransferValues:
    """Ensure grid copies overwrite every destination cell so stale borders never survive."""

    def test_overwrites_whole_destination(self, default_plate: Plate) -> None:
        destination = np.full(default_plate.shape, -1.0)

        transfer_values(default_plate, destination)

        assert np.array_equal(destination, default_plate.values)

    def test_accepts_plain_arrays(self) -> None:
        source = np.arange(9, dtype=float).reshape(3, 3)
        destination = np.zeros((3, 3))

        transfer_values(source, destination)

        assert np.array_equal(destination, source)

    def test_shape_must_match(self, default_plate: Plate) -> None:
        with pytest.raises(ValueError, match="shapes differ"):
            transfer_values(default_plate, np.zeros((3, 3)))
