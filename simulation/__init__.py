"""
Simulation harness for the Chord routing engine.
"""

from .simulator import Simulator

__all__ = ['Simulator']
