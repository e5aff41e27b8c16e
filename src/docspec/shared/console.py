import logging
import sys

from colorama import Fore, Style, init


class ConsoleManager:
    """Manages console output, respecting quiet/verbose/color flags."""

    def __init__(self, level: int, no_color: bool):
        self.level = level
        self.no_color = no_color
        if not no_color:
            init(autoreset=True)

    @staticmethod
    def configure(level: int) -> None:
        logging.basicConfig(
            level=level,
            format="%(message)s",  # Handled by ConsoleManager
            handlers=[logging.StreamHandler(sys.stderr)],
        )

    def _log(self, msg: str, log_level: int, color: str = ""):
        if log_level < self.level:
            return

        if not self.no_color and color:
            msg = f"{color}{msg}{Style.RESET_ALL}"

        if log_level >= logging.ERROR:
            logging.error(msg)
        elif log_level >= logging.WARNING:
            logging.warning(msg)
        elif log_level >= logging.INFO:
            logging.info(msg)
        else:
            logging.debug(msg)

    def debug(self, msg: str):
        self._log(msg, logging.DEBUG, Style.DIM)

    def info(self, msg: str):
        self._log(msg, logging.INFO)

    def warning(self, msg: str):
        self._log(msg, logging.WARNING, Fore.YELLOW)

    def error(self, msg: str):
        self._log(msg, logging.ERROR, Fore.RED)

    def critical(self, msg: str):
        self._log(msg, logging.CRITICAL, Fore.RED + Style.BRIGHT)

    def print_summary(self, stats: dict[str, int]):
        """Print the final counts table."""
        if self.level > logging.INFO:
            return

        print("\n--- Extraction Summary ---", file=sys.stderr)

        def color_val(val, color_if_nonzero):
            if val > 0 and not self.no_color and color_if_nonzero:
                return f"{color_if_nonzero}{val}{Style.RESET_ALL}"
            return str(val)

        summary_data = [
            ("Classes Requested", stats["classes_requested"], ""),
            ("  - Extracted", stats["classes_ok"], Fore.GREEN),
            ("  - Failed", stats["classes_failed"], Fore.RED + Style.BRIGHT),
            ("Members", stats["members"], ""),
            ("Parameters", stats["parameters"], ""),
            ("Tags", stats["tags"], ""),
        ]

        max_label = max(len(label) for label, _, _ in summary_data)
        for label, value, color in summary_data:
            print(f"{label:<{max_label}} : {color_val(value, color)}", file=sys.stderr)
        print("--------------------------", file=sys.stderr)
