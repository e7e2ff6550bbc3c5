"""
Least-squares backends.

Available backends:
    NormalEquationsBackend: CPU implementation inverting X X' by LU
"""

from pynumerics.lstsq.backends.cpu import NormalEquationsBackend

__all__ = [
    "NormalEquationsBackend",
]
