"""
The MODEL layer contains the plate data structure and its I/O.
It has NO knowledge of the iteration scheme; it deals with grids and files.
"""
from hotplate.model.plate import Plate, init_plate

__all__ = ["Plate", "init_plate"]
