"""Implicit shapes and their grid requirements for electromagnetic simulations."""

from . import grids
from .grids import Grid, circumbox, finest_spacing, mask, rasterize
from .interval import Interval
from .shape import Shape
from .shapes import Box, CircularCylinder, Sphere
from .typing import Axis, Sign
from .utils import InvalidArgument
