"""Input/Output operations for curve files and DXF export."""

from .curve_reader import CurveReader, curve_from_mapping, load_curve, save_curve
from .dxf_writer import DXFWriter, export_arcs_to_dxf

__all__ = [
    "CurveReader",
    "DXFWriter",
    "curve_from_mapping",
    "load_curve",
    "save_curve",
    "export_arcs_to_dxf",
]
