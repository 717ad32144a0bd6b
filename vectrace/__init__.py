"""Fit smooth vector outlines to closed lattice paths, with greymap preparation helpers."""

__version__ = "0.1.0"

__all__ = [
    "bitmap",
    "geometry",
    "mkbitmap",
    "model",
    "polygon",
    "progress",
    "progress_bar",
    "smoothing",
    "trace",
    "trans",
]