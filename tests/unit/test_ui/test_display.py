"""Tests for the OpenCV and headless display sinks."""
from unittest.mock import patch

import numpy as np
import pytest

from part_inspector.ui.display import DisplaySink, NullDisplay, OpenCVDisplay


@pytest.fixture
def mock_cv2():
    with patch('part_inspector.ui.display.cv2') as cv2_mock:
        yield cv2_mock


def test_display_sink_is_abstract():
    with pytest.raises(TypeError):
        DisplaySink()


def test_null_display_discards(blank_frame):
    display = NullDisplay()

    display.show('Camera', blank_frame)
    display.close()


class TestOpenCVDisplay:

    def test_window_created_once(self, mock_cv2, blank_frame):
        display = OpenCVDisplay()

        display.show('Camera', blank_frame)
        display.show('Camera', blank_frame)
        display.show('Central Box', blank_frame)

        names = [c[0][0] for c in mock_cv2.namedWindow.call_args_list]
        assert names == ['Camera', 'Central Box']
        assert mock_cv2.imshow.call_count == 3

    def test_show_pumps_events(self, mock_cv2):
        image = np.zeros((10, 10, 3), dtype=np.uint8)
        display = OpenCVDisplay()

        display.show('Camera', image)

        mock_cv2.imshow.assert_called_once_with('Camera', image)
        mock_cv2.waitKey.assert_called_once_with(1)

    def test_close_destroys_open_windows(self, mock_cv2, blank_frame):
        display = OpenCVDisplay()
        display.show('Camera', blank_frame)

        display.close()
        display.close()

        mock_cv2.destroyAllWindows.assert_called_once_with()

    def test_close_without_windows(self, mock_cv2):
        OpenCVDisplay().close()

        mock_cv2.destroyAllWindows.assert_not_called()
