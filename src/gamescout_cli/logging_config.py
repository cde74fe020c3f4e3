import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from colorama import Fore, Style
from colorama import init as colorama_init

from .config import LOG_FILE, LOG_LEVEL, RAWG_API_KEY


class SensitiveDataFilter(logging.Filter):
    """Filter to mask the catalog API key in logs."""

    def __init__(self, secrets: dict[str, str] | None = None):
        super().__init__()
        if secrets is None:
            secrets = {"RAWG_API_KEY": RAWG_API_KEY}
        self.secrets = {label: value for label, value in secrets.items() if value}

    def mask(self, text):
        if isinstance(text, str):
            for label, value in self.secrets.items():
                if value in text:
                    text = text.replace(value, f"***{label}***")
        return text

    def filter(self, record):
        record.msg = self.mask(record.msg)

        if record.args:
            if isinstance(record.args, tuple):
                record.args = tuple(self.mask(arg) for arg in record.args)
            elif isinstance(record.args, dict):
                record.args = {k: self.mask(v) for k, v in record.args.items()}

        return True


def setup_logging(log_file: str = LOG_FILE):
    # Force color if requested via environment variable (common in Docker)
    force_color = os.getenv("FORCE_COLOR", "").lower() in ("1", "true")
    colorama_init(autoreset=True, strip=False if force_color else None)

    # Remove existing handlers to ensure our configuration takes precedence
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    sensitive_filter = SensitiveDataFilter()

    # Root at DEBUG; handlers filter as needed
    root.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(LOG_LEVEL)
    console_handler.setFormatter(
        logging.Formatter(
            f"{Fore.CYAN}%(asctime)s{Style.RESET_ALL} | "
            f"{Fore.GREEN}%(levelname)s{Style.RESET_ALL}: "
            f"{Fore.YELLOW}%(name)s{Style.RESET_ALL} - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler.addFilter(sensitive_filter)
    root.addHandler(console_handler)

    # File Handler (Plain text, Rotating) - Always DEBUG
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s: %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    file_handler.addFilter(sensitive_filter)
    root.addHandler(file_handler)


def get_logger(name: str):
    return logging.getLogger(name)
