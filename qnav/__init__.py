"""Inventor style 3D viewport navigation for VTK viewers."""

__version__ = "0.1.0"
