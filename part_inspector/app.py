"""
Part Inspection Application
Command line entry point: builds the frame source, then runs the loop
headless, in OpenCV windows, or in the PyQt6 window.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config.settings import InspectionSettings, ConfigurationError, SOURCE_KINDS
from .controller.inspection_loop import InspectionLoop
from .ui.display import NullDisplay, OpenCVDisplay
from .utils.logger import setup_logging
from .vision.image_source import ImageSourceFactory

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SOURCE_FAILED = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Live color and shape inspection of the central box of a camera feed"
    )
    parser.add_argument("--config", "-c", type=str, default=None,
                        help="JSON settings file; command line flags override its values")
    parser.add_argument("--source", choices=SOURCE_KINDS, default=None,
                        help="Frame source (default: gstreamer)")
    parser.add_argument("--camera-index", type=int, default=None,
                        help="Device index for --source camera")
    parser.add_argument("--video", type=str, default=None,
                        help="Video file to replay; implies --source video")
    parser.add_argument("--box-size", type=int, default=None,
                        help="Side length of the central inspection box in pixels")
    parser.add_argument("--interval", type=float, default=None,
                        help="Minimum seconds between classification cycles")
    parser.add_argument("--no-flip", action="store_true",
                        help="Do not rotate the Pi camera image by 180 degrees")
    parser.add_argument("--headless", action="store_true",
                        help="Do not open any display windows")
    parser.add_argument("--gui", action="store_true",
                        help="Use the PyQt6 inspection window instead of OpenCV windows")
    parser.add_argument("--log-file", action="store_true",
                        help="Also write a daily log file under logs/")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> InspectionSettings:
    """Merge the optional settings file with command line overrides."""
    settings = InspectionSettings.load(args.config) if args.config else InspectionSettings()

    if args.video:
        settings.source = 'video'
        settings.video_path = args.video
    elif args.source:
        settings.source = args.source
    if args.camera_index is not None:
        settings.camera_index = args.camera_index
    if args.box_size is not None:
        settings.box_size = args.box_size
    if args.interval is not None:
        settings.detection_interval_s = args.interval
    if args.no_flip:
        settings.flip_method = None
    if args.headless:
        settings.show_windows = False

    return settings.validate()


def run_gui(loop: InspectionLoop) -> int:
    """
    Run the loop inside the PyQt6 window until it is closed.
    A configuration error caught by the window is raised again once the
    event loop has returned.
    """
    from PyQt6.QtWidgets import QApplication
    from .ui.main_window import InspectionMainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    window = InspectionMainWindow(loop)
    window.show()
    window.start()
    app.exec()
    if window.error is not None:
        raise window.error
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO,
                  log_to_file=args.log_file)

    try:
        settings = build_settings(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    source = ImageSourceFactory.create_source_from_settings(settings)
    with source:
        if not source.is_available():
            logger.error("Could not open camera.")
            return EXIT_SOURCE_FAILED

        if not settings.show_windows:
            display = NullDisplay()
        elif args.gui:
            display = None
        else:
            display = OpenCVDisplay()

        loop = InspectionLoop(source, settings, display=display)
        try:
            if args.gui and settings.show_windows:
                return run_gui(loop)
            return loop.run()
        except ConfigurationError as e:
            logger.error(f"Invalid configuration for this source: {e}")
            return EXIT_CONFIG_ERROR
        finally:
            if display is not None:
                display.close()


if __name__ == "__main__":
    sys.exit(main())
