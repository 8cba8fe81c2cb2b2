"""Steady-state heat diffusion on a square plate by Jacobi relaxation."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hotplate")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
