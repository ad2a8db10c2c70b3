import logging
import os
from pathlib import Path


def create_logger(
    log_level: str = "INFO",
    logger_name: str = "chatgpt-share-api",
    logs_dir: str | Path | None = None,
) -> logging.Logger:
    """
    Create a logger that outputs to console and optionally to a file.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance, also used as the log file name.
        logs_dir (str | Path | None): Directory for log files. If None, the LOG_DIR
            environment variable is used; if that is unset only console logging is configured.

    Returns:
        logging.Logger: Configured logger instance.
    """
    if logs_dir is None:
        logs_dir = os.getenv("LOG_DIR")

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.DEBUG))
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if not logger.handlers:  # Prevent handler duplication
        # Console handler (stdio) - always add this
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if logs_dir:
            try:
                logs_path = Path(logs_dir)
                logs_path.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(logs_path / f"{logger_name}.log")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"File logging disabled, cannot write to {logs_dir}: {e}")

    return logger


def get_parameters(
    param_names: list[str] | str,
    base_path: str,
    *,
    decrypt: bool = False,
    region_name: str = "us-east-1",
) -> dict[str, str | None]:
    """
    Retrieve configuration parameters from environment variables.

    Mirrors the signature of the AWS Parameter Store variant so the two can be swapped.
    `base_path`, `decrypt` and `region_name` are ignored locally.

    Args:
        param_names (list[str] | str): Leaf names of the parameters to read.
        base_path (str): Parameter Store path prefix (unused).

    Returns:
        dict: Maps each lower-case parameter name to its value, or None when unset.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    # Environment variables are upper case, result keys lower case
    return {name.lower(): os.getenv(name.upper()) for name in param_names}
