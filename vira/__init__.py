"""Vira - restaurant reservations and floor plans"""

__version__ = "1.0.0"
