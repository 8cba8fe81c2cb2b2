from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

import numpy as np
import matplotlib.pyplot as plt

from hotplate.config import DESIRED_ITERATIONS, HEAT_EPSILON, ITERATION_LIMIT
from hotplate.model.plate import Plate
from hotplate.solvers.relaxation import max_change, state_changed, update_temps

logger = logging.getLogger(__name__)

IterationCallback = Callable[[int, Plate], None]


class RunState(Enum):
    INITIALIZING = "initializing"
    ITERATING = "iterating"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration_limit_reached"
    FIXED_COUNT_COMPLETE = "fixed_count_complete"

    @property
    def is_terminal(self) -> bool:
        return self in (
            RunState.CONVERGED,
            RunState.ITERATION_LIMIT_REACHED,
            RunState.FIXED_COUNT_COMPLETE,
        )


@dataclass
class SimulationResult:
    """Outcome of a solver run."""
    plate: Plate
    iterations: int
    state: RunState
    # Maximum interior change of every iteration performed during the run
    history: list[float] = field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.state is RunState.CONVERGED

    def plot_convergence(self, show: bool = True) -> plt.Figure:
        """
        Plot the maximum interior change per iteration on a log scale.
        """
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, ax = plt.subplots(figsize=(7, 5))

        steps = np.arange(1, len(self.history) + 1)
        ax.semilogy(steps, self.history, 'r', lw=2)

        ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        ax.minorticks_on()
        ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        ax.set_title(f"Convergence ({self.state.value})")
        ax.set_xlabel("Iteration")
        ax.set_ylabel("Max interior change")

        if show:
            plt.show()
        return fig


class Solver:
    """
    Jacobi relaxation driver.

    The solver holds the current plate and replaces it with a new plate after
    every step. Plates are never modified in place.
    """

    def __init__(
        self,
        plate: Plate,
        epsilon: float = HEAT_EPSILON,
        iteration_limit: int = ITERATION_LIMIT,
    ) -> None:
        """
        Initialize the solver with a starting plate.

        Args:
            plate: Initial plate. Its border cells stay fixed for the whole run.
            epsilon: Convergence threshold for the steady-state run.
            iteration_limit: Cap on the iteration counter for the steady-state run.
        """
        if epsilon < 0:
            raise ValueError(f"Epsilon must be non-negative, got {epsilon}.")
        if iteration_limit < 1:
            raise ValueError(f"Iteration limit must be positive, got {iteration_limit}.")

        self.plate = plate
        self.epsilon = epsilon
        self.iteration_limit = iteration_limit

        self.iterations: int = 0
        self.state: RunState = RunState.INITIALIZING
        self.history: list[float] = []

    def step(self) -> Plate:
        """
        Perform one relaxation step and promote the result to the current plate.

        Returns:
            The new current plate.
        """
        old = self.plate
        new = update_temps(old)
        self._advance(old, new)
        return new

    def _advance(self, old: Plate, new: Plate) -> None:
        self.history.append(max_change(old, new))
        self.plate = new
        self.iterations += 1
        self.state = RunState.ITERATING

    def solve_steady_state(self, callback: Optional[IterationCallback] = None) -> SimulationResult:
        """
        Iterate until no interior cell changes by more than epsilon, or until
        the iteration counter reaches the limit.

        Iterations already performed with `step()` count toward the limit.

        Args:
            callback: Called as callback(iteration, plate) after every iteration.

        Returns:
            The final plate with the number of iterations and terminal state.
        """
        start = len(self.history)
        logger.info(f"Solving to steady state (epsilon={self.epsilon}, limit={self.iteration_limit})")

        has_reached_steady_state = False
        while True:
            old = self.plate
            new = update_temps(old)
            has_reached_steady_state = not state_changed(old, new, self.epsilon)
            self._advance(old, new)

            if callback is not None:
                callback(self.iterations, new)

            if has_reached_steady_state or self.iterations >= self.iteration_limit:
                break

        if has_reached_steady_state:
            self.state = RunState.CONVERGED
            logger.info(f"Steady state reached after {self.iterations} iterations")
        else:
            self.state = RunState.ITERATION_LIMIT_REACHED
            logger.warning(
                f"Iteration limit {self.iteration_limit} reached before steady state "
                f"(last change {self.history[-1]:.6f})"
            )

        return SimulationResult(
            plate=self.plate,
            iterations=self.iterations,
            state=self.state,
            history=self.history[start:],
        )

    def run_fixed(
        self,
        iterations: int = DESIRED_ITERATIONS,
        callback: Optional[IterationCallback] = None,
    ) -> SimulationResult:
        """
        Run exactly `iterations` relaxation steps, regardless of convergence.
        """
        if iterations < 0:
            raise ValueError(f"Number of iterations must be non-negative, got {iterations}.")

        start = len(self.history)
        logger.info(f"Running {iterations} fixed iterations")

        for _ in range(iterations):
            new = self.step()
            if callback is not None:
                callback(self.iterations, new)

        self.state = RunState.FIXED_COUNT_COMPLETE
        return SimulationResult(
            plate=self.plate,
            iterations=self.iterations,
            state=self.state,
            history=self.history[start:],
        )
