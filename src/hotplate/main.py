"""
Application Entry
=================
This module runs the hotplate program: it relaxes the default plate to steady
state, prints and exports it, then shows the transient behaviour of a plate
imported from a text file.

Why is this file needed?
------------------------
It is the orchestration root. It:
1. Builds the initial plate and prints it.
2. Drives the Solver to steady state and exports the result.
3. Decides which I/O failures are fatal (export) and which are not (import).
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from hotplate.config import SimulationConfig
from hotplate.errors import PlateFileError, PlateFormatError
from hotplate.logging_config import setup_logging
from hotplate.model.io import PlateIO
from hotplate.model.plate import Plate, init_plate
from hotplate.solvers.solver import Solver

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_EXPORT_FAILED = 1


def run(config: SimulationConfig, out: TextIO) -> int:
    """
    Execute the full program sequence.

    Args:
        config: Simulation parameters and file locations.
        out: Stream that receives the console output.

    Returns:
        Process exit status.
    """
    def print_plate(plate: Plate) -> None:
        PlateIO.write(
            plate,
            stream=out,
            precision=config.precision,
            width=config.width,
            delimiter=config.delimiter,
        )

    # 1. Initialize plate with constant edges and zeros for internal temperatures
    plate = init_plate(size=config.plate_size, initial_temp=config.initial_temp)

    print("Hotplate simulator\n", file=out)
    print("Printing the initial plate values...", file=out)
    print_plate(plate)

    # 2. One iteration, shown on its own
    solver = Solver(plate, epsilon=config.epsilon, iteration_limit=config.iteration_limit)
    print("\nPrinting plate after one iteration...", file=out)
    print_plate(solver.step())

    # 3. Iterate until steady state is achieved or until we reach the limit
    result = solver.solve_steady_state()

    print("\nPrinting final plate...", file=out)
    print_plate(result.plate)

    # 4. Export; failure here ends the run
    csv_path = config.resolve(config.csv_path)
    print(f"\nWriting final plate to \"{config.csv_path}\"...\n", file=out)
    try:
        PlateIO.export_csv(
            result.plate,
            csv_path,
            precision=config.precision,
            width=config.width,
            delimiter=config.delimiter,
        )
    except PlateFileError as e:
        print(e, file=out)
        print("Error occurred when writing to CSV", file=out)
        return EXIT_EXPORT_FAILED

    # 5. Imported plate; a failed import keeps the steady-state plate
    input_path = config.resolve(config.input_path)
    try:
        imported = PlateIO.load_text(input_path, size=config.plate_size)
    except PlateFileError:
        print(f"Could not open file {config.input_path}.", file=out)
        imported = result.plate
    except PlateFormatError as e:
        print(f"Could not read plate from {config.input_path}: {e}", file=out)
        imported = result.plate

    print(f"Printing input plate after {config.desired_iterations} updates...", file=out)
    transient = Solver(imported, epsilon=config.epsilon).run_fixed(config.desired_iterations)
    print_plate(transient.plate)

    return EXIT_SUCCESS


def main(config: Optional[SimulationConfig] = None, out: Optional[TextIO] = None) -> int:
    # Diagnostics only; plate output goes to `out`
    setup_logging(level=logging.WARNING)

    if config is None:
        config = SimulationConfig()
    if out is None:
        out = sys.stdout

    return run(config, out)


if __name__ == "__main__":
    sys.exit(main())
