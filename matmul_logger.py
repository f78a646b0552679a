import logging
import sys
import os

logs_env = os.getenv("LOGS")
logs_env = logs_env.strip() if logs_env else None


def _level_from_env():
    # LOGS=0 -> warnings only, LOGS=1 -> info (default), LOGS=2 -> debug
    if logs_env == "0":
        return logging.WARNING
    if logs_env == "2":
        return logging.DEBUG
    return logging.INFO


def create_logger(name: str, prefix: str = "") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.hasHandlers():
        level = _level_from_env()
        logger.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        # Custom formatter that includes the prefix (if provided)
        class PrefixFormatter(logging.Formatter):
            def __init__(self, prefix: str = "", *args, **kwargs):
                super().__init__(*args, **kwargs)
                self.prefix = prefix

            def format(self, record: logging.LogRecord) -> str:
                formatted = super().format(record)
                if self.prefix:
                    return f"[{self.prefix}] {formatted}"
                return formatted

        formatter = PrefixFormatter(
            prefix=prefix,
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
