"""
Configuration & Constants
=========================
This module serves as the central registry for the simulation constants and
the file names used for import/export.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (plate size, thresholds, output
   formatting) scattered throughout the code.
2. Testing: The constants are only defaults. Every component accepts them as
   parameters, and `SimulationConfig` bundles them so a whole run can be
   executed on a small grid or against temporary files.

Exports:
    PLATE_SIZE (int): Length and width of the plate.
    INITIAL_TEMP (float): Starting temperature of the top and bottom rows.
    HEAT_EPSILON (float): Threshold at which the plate is still changing.
    CSV_FILENAME (str): Name of the exported plate file.
    INPUT_FILENAME (str): Name of the imported plate file.
    SimulationConfig: Dataclass grouping all of the above.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


# Global Constants
PLATE_SIZE: int = 10
INITIAL_TEMP: float = 100.0
HEAT_EPSILON: float = 0.1
OUTPUT_PRECISION: int = 3
OUTPUT_WIDTH: int = 9
OUTPUT_DELIMITER: str = ","
ITERATION_LIMIT: int = 999999
DESIRED_ITERATIONS: int = 3

CSV_FILENAME: str = "Hotplate.csv"
INPUT_FILENAME: str = "Inputplate.txt"


def get_working_path(filename: str) -> str:
    """
    Get absolute path of a file in the current working directory.
    """
    return os.path.join(os.getcwd(), filename)


@dataclass
class SimulationConfig:
    """All parameters of a single hotplate run."""
    plate_size: int = PLATE_SIZE
    initial_temp: float = INITIAL_TEMP
    epsilon: float = HEAT_EPSILON
    precision: int = OUTPUT_PRECISION
    width: int = OUTPUT_WIDTH
    delimiter: str = OUTPUT_DELIMITER
    iteration_limit: int = ITERATION_LIMIT
    desired_iterations: int = DESIRED_ITERATIONS

    # Relative paths are resolved against the working directory at run time
    csv_path: str | Path = CSV_FILENAME
    input_path: str | Path = INPUT_FILENAME

    def resolve(self, path: str | Path) -> str:
        if os.path.isabs(path):
            return str(path)
        return get_working_path(str(path))
