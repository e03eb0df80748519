"""
Main Window - Live Part Inspection View
PyQt6 front end that drives the inspection loop from a timer and shows the
live frame, the central box and the latest verdict.
"""

import numpy as np
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QGroupBox,
    QPushButton
)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QImage, QPixmap
import logging

from ..config.settings import ConfigurationError
from ..controller.inspection_loop import InspectionLoop
from ..vision.inspector import InspectionResult
from .display import DisplaySink

logger = logging.getLogger(__name__)


def to_pixmap(image: np.ndarray) -> QPixmap:
    """Convert a BGR or grayscale numpy image to a QPixmap."""
    image = np.ascontiguousarray(image)
    height, width = image.shape[:2]
    if image.ndim == 2:
        q_img = QImage(image.data, width, height, image.strides[0],
                       QImage.Format.Format_Grayscale8)
    else:
        q_img = QImage(image.data, width, height, image.strides[0],
                       QImage.Format.Format_BGR888)
    # QImage does not own the buffer
    return QPixmap.fromImage(q_img.copy())


class PaneDisplay(DisplaySink):
    """Display sink that routes the loop's named images to the window panes."""

    def __init__(self, window: 'InspectionMainWindow'):
        self.window = window

    def show(self, window_name: str, image: np.ndarray):
        self.window.set_pane_image(window_name, image)


class InspectionMainWindow(QMainWindow):
    """
    Live inspection window.
    A configuration error raised while processing a frame stops the timer,
    is kept on ``error`` and quits the application.
    """

    def __init__(self, loop: InspectionLoop, interval_ms: int = 1):
        super().__init__()
        self.setWindowTitle("Part Inspection")

        self.loop = loop
        self.display = PaneDisplay(self)
        self.loop.display = self.display
        self.error = None

        self.camera_timer = QTimer()
        self.camera_timer.timeout.connect(self.update_camera_frame)
        self.interval_ms = interval_ms

        self.init_ui()
        logger.info("InspectionMainWindow initialized")

    def init_ui(self):
        """Initialize the user interface"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        views = QHBoxLayout()

        camera_group = QGroupBox(self.loop.settings.camera_window)
        camera_layout = QVBoxLayout()
        self.camera_label = QLabel("No frame")
        self.camera_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        camera_layout.addWidget(self.camera_label)
        camera_group.setLayout(camera_layout)
        views.addWidget(camera_group)

        region_group = QGroupBox(self.loop.settings.region_window)
        region_layout = QVBoxLayout()
        self.region_label = QLabel("No frame")
        self.region_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        region_layout.addWidget(self.region_label)
        region_group.setLayout(region_layout)
        views.addWidget(region_group)

        main_layout.addLayout(views)

        # Result panel
        result_group = QGroupBox("Inspection Result")
        result_layout = QVBoxLayout()

        self.verdict_label = QLabel("WAITING")
        self.verdict_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        verdict_font = QFont()
        verdict_font.setPointSize(20)
        verdict_font.setBold(True)
        self.verdict_label.setFont(verdict_font)
        self.verdict_label.setStyleSheet("background-color: gray; color: white; padding: 10px;")
        result_layout.addWidget(self.verdict_label)

        self.result_label = QLabel("")
        result_layout.addWidget(self.result_label)

        self.fps_label = QLabel("FPS: -")
        result_layout.addWidget(self.fps_label)

        result_group.setLayout(result_layout)
        main_layout.addWidget(result_group)

        controls = QHBoxLayout()
        self.btn_start = QPushButton("Start")
        self.btn_start.clicked.connect(self.start)
        self.btn_stop = QPushButton("Stop")
        self.btn_stop.clicked.connect(self.stop)
        controls.addWidget(self.btn_start)
        controls.addWidget(self.btn_stop)
        main_layout.addLayout(controls)

    def set_pane_image(self, window_name: str, image: np.ndarray):
        """Put a named image from the loop into its pane."""
        if window_name == self.loop.settings.camera_window:
            self.camera_label.setPixmap(to_pixmap(image))
        elif window_name == self.loop.settings.region_window:
            self.region_label.setPixmap(to_pixmap(image))

    def start(self):
        """Start pulling frames."""
        if not self.camera_timer.isActive():
            self.camera_timer.start(self.interval_ms)
            logger.info("Live inspection started")

    def stop(self):
        """Stop pulling frames."""
        if self.camera_timer.isActive():
            self.camera_timer.stop()
            logger.info("Live inspection stopped")

    def update_camera_frame(self):
        """Process one frame and refresh the result panel."""
        try:
            has_frame = self.loop.process_next()
        except ConfigurationError as e:
            logger.error(f"Stopping live inspection: {e}")
            self.stop()
            self.error = e
            self.verdict_label.setText("CONFIG ERROR")
            self.verdict_label.setStyleSheet("background-color: #e74c3c; color: white; padding: 10px;")
            QApplication.quit()
            return

        if not has_frame:
            self.stop()
            self.verdict_label.setText("END OF STREAM")
            self.verdict_label.setStyleSheet("background-color: gray; color: white; padding: 10px;")
            return

        result = self.loop.state.last_result
        if result is not None:
            self._update_result_display(result)
        if self.loop.state.last_fps:
            self.fps_label.setText(f"FPS: {self.loop.state.last_fps:.1f}")

    def _update_result_display(self, result: InspectionResult):
        color = "#27ae60" if result.is_ok else "#e74c3c"
        self.verdict_label.setText("GOOD" if result.is_ok else "BAD")
        self.verdict_label.setStyleSheet(f"background-color: {color}; color: white; padding: 10px;")
        self.result_label.setText(result.get_summary())

    def closeEvent(self, event):
        """Stop the timer when the window closes."""
        self.stop()
        event.accept()
