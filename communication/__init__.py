"""
Network topology package for the Chord simulator.
"""

from .network import Network

__all__ = ['Network']
