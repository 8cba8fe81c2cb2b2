"""
Input/Output Manager (Text & CSV)
Handles rendering plates as delimited text and loading plates from text files.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import numpy as np

from hotplate.config import (
    CSV_FILENAME,
    INPUT_FILENAME,
    OUTPUT_DELIMITER,
    OUTPUT_PRECISION,
    OUTPUT_WIDTH,
    PLATE_SIZE,
)
from hotplate.errors import PlateFileError, PlateFormatError
from hotplate.model.plate import Plate

# Get module logger
logger = logging.getLogger(__name__)


def format_plate(
    plate: Plate,
    precision: int = OUTPUT_PRECISION,
    width: int = OUTPUT_WIDTH,
    delimiter: str = OUTPUT_DELIMITER,
) -> str:
    """
    Render a plate as delimited fixed-point text.

    Every value is printed with `precision` decimals and right-justified in a
    column of `width` characters. Fields are joined by `delimiter`, with no
    delimiter after the last field of a row. Each row ends with a newline.
    """
    lines = []
    for row in plate:
        lines.append(delimiter.join(f"{value:{width}.{precision}f}" for value in row))
    return "".join(line + "\n" for line in lines)


class PlateIO:

    @staticmethod
    def write(
        plate: Plate,
        stream: Optional[TextIO] = None,
        precision: int = OUTPUT_PRECISION,
        width: int = OUTPUT_WIDTH,
        delimiter: str = OUTPUT_DELIMITER,
    ) -> None:
        """Stream a plate to an output, stdout by default."""
        if stream is None:
            stream = sys.stdout
        stream.write(format_plate(plate, precision=precision, width=width, delimiter=delimiter))

    @staticmethod
    def export_csv(
        plate: Plate,
        filepath: str | Path = CSV_FILENAME,
        precision: int = OUTPUT_PRECISION,
        width: int = OUTPUT_WIDTH,
        delimiter: str = OUTPUT_DELIMITER,
    ) -> None:
        """
        Export a plate to a CSV file, in the same format as `write`.

        Raises:
            PlateFileError: If the file cannot be created, opened or written.
        """
        logger.info(f"Exporting plate to: {filepath}")
        try:
            f = open(filepath, "w", encoding="utf-8", newline="")
        except OSError as e:
            logger.error(f"Could not open file {filepath}: {e}")
            raise PlateFileError(filepath, f"Could not open file {filepath}") from e

        try:
            with f:
                PlateIO.write(plate, stream=f, precision=precision, width=width, delimiter=delimiter)
        except OSError as e:
            logger.error(f"Could not write file {filepath}: {e}")
            raise PlateFileError(filepath, f"Could not write file {filepath}") from e

        logger.debug(f"Plate exported to: {filepath}")

    @staticmethod
    def load_text(filepath: str | Path = INPUT_FILENAME, size: int = PLATE_SIZE) -> Plate:
        """
        Initialize a plate from values contained in a text file.

        Values may be separated by any whitespace (spaces, tabs, line breaks)
        and are read in row-major order.

        Args:
            filepath: Path to the text file.
            size: Length and width of the plate to read.

        Returns:
            The loaded plate.

        Raises:
            PlateFileError: If the file cannot be opened.
            PlateFormatError: If the file is not UTF-8 text or does not hold
                exactly size*size numbers.
        """
        logger.info(f"Loading plate from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                tokens = f.read().split()
        except OSError as e:
            logger.error(f"Could not open file {filepath}: {e}")
            raise PlateFileError(filepath, f"Could not open file {filepath}") from e
        except UnicodeDecodeError as e:
            msg = f"File '{filepath}' is not valid UTF-8 text: {e}"
            logger.error(msg)
            raise PlateFormatError(msg) from e

        expected = size * size
        if len(tokens) != expected:
            msg = f"File '{filepath}' contains {len(tokens)} values, expected {expected}."
            logger.error(msg)
            raise PlateFormatError(msg)

        values = np.empty(expected, dtype=np.float64)
        for i, token in enumerate(tokens):
            try:
                values[i] = float(token)
            except ValueError:
                row, col = divmod(i, size)
                msg = f"File '{filepath}' has a non-numeric value {token!r} at row {row}, column {col}."
                logger.error(msg)
                raise PlateFormatError(msg) from None

        return Plate.from_array(values.reshape(size, size))
