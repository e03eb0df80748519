"""
Controller Layer
Manages the per-frame inspection flow.
"""

from .inspection_loop import InspectionLoop, InspectionState

__all__ = ['InspectionLoop', 'InspectionState']
