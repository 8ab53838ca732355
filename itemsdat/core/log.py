import binascii
from datetime import datetime
import logging
import os
from pathlib import Path
import platform
import sys


class ColorFormatter(logging.Formatter):
    RESET = "\x1b[0m"

    NAME_COLOR = "\x1b[90m"
    FILE_COLOR = "\x1b[38;5;250m"
    LINE_COLOR = "\x1b[38;5;222m"

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[35m",
    }

    def format(self, record: logging.LogRecord) -> str:
        record.asctime_colored = f"\x1b[90m{self.formatTime(record, self.datefmt)}{self.RESET}"
        level_color = self.LEVEL_COLORS.get(record.levelno, "")
        record.levelname_colored = f"{level_color}{record.levelname:<8}{self.RESET}"
        record.name_colored = f"{self.NAME_COLOR}{record.name}{self.RESET}"
        record.filename_colored = f"{self.FILE_COLOR}{record.filename}{self.RESET}"
        record.lineno_colored = f"{self.LINE_COLOR}{record.lineno}{self.RESET}"

        return super().format(record)


def _format_session_block(name: str, log_file: Path, start_ts: datetime, id: str) -> str:
    lines = [
        "=" * 80,
        f"SESSION START {id}",
        "=" * 80,
        f"Timestamp:     {start_ts.isoformat(sep=' ', timespec='seconds')}",
        f"Logger:        {name}",
        f"Log File:      {log_file}",
        f"PID:           {os.getpid()}",
        f"CWD:           {os.getcwd()}",
        f"Command:       {' '.join(sys.argv)}",
        f"Python:        {platform.python_version()} ({sys.executable})",
        f"Platform:      {platform.platform()}",
        "=" * 80,
    ]
    return "\n".join(lines)


def setup_logger(name: str = "itemsdat", log_dir: str | Path | None = "logs", level: int = logging.INFO) -> logging.Logger:
    """Configure the root logger once per process.

    Console output goes to stderr so it never mixes with command output on stdout.
    When `log_dir` is given, every session also gets its own file there.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if getattr(root_logger, "_session_logger_configured", False):
        for h in root_logger.handlers:
            h.setLevel(level)
        return logging.getLogger(name)

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColorFormatter(
            "%(asctime_colored)s [%(levelname_colored)s] %(name_colored)s %(filename_colored)s:%(lineno_colored)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        start_ts = datetime.now()
        log_file = Path(log_dir) / f"{start_ts.strftime('%Y%m%d_%H%M%S')}_{name}.log"
        try:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root_logger.warning(f"file logging disabled, cannot open {log_file}: {e}")
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s %(filename)s:%(lineno)d: %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            id = binascii.hexlify(os.urandom(16)).decode()
            file_handler.stream.write(_format_session_block(name, log_file, start_ts, id) + "\n\n")
            file_handler.flush()
            root_logger.addHandler(file_handler)
            root_logger._session_log_file = str(log_file)  # type: ignore

    root_logger._session_logger_configured = True  # type: ignore

    return logging.getLogger(name)
