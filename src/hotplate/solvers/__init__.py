from hotplate.solvers.relaxation import (
    first_change,
    max_change,
    state_changed,
    transfer_values,
    update_temps,
)
from hotplate.solvers.solver import RunState, SimulationResult, Solver

__all__ = [
    "RunState",
    "SimulationResult",
    "Solver",
    "first_change",
    "max_change",
    "state_changed",
    "transfer_values",
    "update_temps",
]
