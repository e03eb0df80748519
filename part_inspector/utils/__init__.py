"""
Utility modules for the inspection system.
"""

from .logger import setup_logging
from .timer import timed_operation

__all__ = ['setup_logging', 'timed_operation']
