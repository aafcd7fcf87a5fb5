"""Main entry point for Break Reminder application.

This module provides the main entry point for the Break Reminder tray
application using the MVP (Model-View-Presenter) architecture pattern.
"""

import sys
from argparse import ArgumentParser, ArgumentTypeError, RawDescriptionHelpFormatter

from PyQt6.QtWidgets import QApplication

from .presenters.break_reminder_presenter import BreakReminderPresenter
from .utils.logging_config import setup_logging
from .utils.structured_logging import get_structured_logger


def _positive_seconds(value: str) -> int:
    seconds = int(value)
    if seconds <= 0:
        raise ArgumentTypeError("interval must be a positive number of seconds")
    return seconds


def create_argument_parser() -> ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        ArgumentParser: Configured argument parser
    """
    parser = ArgumentParser(
        description="Break Reminder - periodic movement break reminders in the system tray",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                    # Run with stored settings
  %(prog)s -v                 # Run with verbose logging
  %(prog)s --interval 10      # Remind every 10 seconds this session
""",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (use -v for info, -vv for debug, -vvv for trace)",
    )

    parser.add_argument("--log-file", type=str, help="Log to file (in addition to console)")

    parser.add_argument("--config", type=str, help="Settings file to use instead of the default location")

    parser.add_argument(
        "--interval", type=_positive_seconds, help="Override the reminder interval (seconds) for this session"
    )

    parser.add_argument("--no-auto-start", action="store_true", help="Do not start counting on launch")

    return parser


def main() -> None:
    """Main entry point for the Break Reminder application."""
    parser = create_argument_parser()
    args = parser.parse_args()

    setup_logging(verbosity=args.verbose, log_file=args.log_file, log_to_console=True)

    logger = get_structured_logger(__name__)

    logger.info(
        "Break Reminder application starting",
        verbosity_level=args.verbose,
        log_file=args.log_file or "console_only",
        interval_override=args.interval,
    )

    try:
        app = QApplication(sys.argv)
        app.setApplicationName("Break Reminder")
        # Closing the settings dialog must not end a tray-only application
        app.setQuitOnLastWindowClosed(False)

        with logger.context(component="presenter_initialization"):
            presenter = BreakReminderPresenter(config_file_path=args.config, interval_override=args.interval)
            if not presenter.view.is_tray_available():
                logger.warning("No system tray detected, reminders will still be delivered if possible")
            presenter.show_view()

            if presenter.config_model.config_data.auto_start and not args.no_auto_start:
                presenter.start_reminders()
            logger.info("Tray view initialized and displayed", mode=presenter.scheduler.mode)

        logger.info("Starting Qt event loop")
        exit_code = app.exec()

        presenter.shutdown()
        logger.info("Application shutting down", exit_code=exit_code)
        sys.exit(exit_code)

    except Exception as e:
        logger.exception("Application startup failed", error_type=type(e).__name__, error_message=str(e))
        raise


if __name__ == "__main__":
    main()
