"""
Entry point for rawedit.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import EditorConfig, load_config
from .core.document import Document
from .ui.input_handler import HELP_STATUS_MESSAGE, InputHandler
from .ui.keys import KeyDecoder
from .ui.terminal import RawTerminal, TerminalError
from .ui.window import WindowManager
from .utils.logger import setup_logger

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="rawedit - minimal text editor for VT100 terminals"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=str,
        help="File to open"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write debug log records to this file"
    )
    return parser.parse_args(argv)


def run(terminal: RawTerminal, config: EditorConfig, filename: Optional[str] = None) -> None:
    """Run the editor until the user quits."""

    height, width = terminal.get_window_size()

    document = Document(tab_stop=config.tab_stop)
    if filename:
        document.load_file(filename)

    window_manager = WindowManager(terminal, document, height, width, config)
    input_handler = InputHandler(window_manager, KeyDecoder(terminal.read_byte))

    window_manager.set_status_message(HELP_STATUS_MESSAGE)

    while True:
        window_manager.refresh_screen()
        if not input_handler.process_keypress():
            break


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the application."""

    args = parse_args(argv)
    config = load_config()
    if args.log_file:
        config.log_file = args.log_file

    setup_logger(config.log_file)

    try:
        with RawTerminal(read_timeout=config.read_timeout) as terminal:
            run(terminal, config, args.file)
    except (TerminalError, OSError) as e:
        logger.error("Fatal: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
