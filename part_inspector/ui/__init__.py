"""
User Interface Module
Display sinks for the inspection loop. The PyQt6 window lives in
part_inspector.ui.main_window and is imported on demand.
"""

from .display import DisplaySink, NullDisplay, OpenCVDisplay

__all__ = ['DisplaySink', 'NullDisplay', 'OpenCVDisplay']
