import logging
import logging.handlers
import os

from root_shell.utils.config import Config

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(config: Config) -> None:
    """Send root shell logs to a rotating file, with only critical ones on the console

    The console stays quiet because the shell's own stderr is passed
    through to the same terminal. Missing logging settings fall back to
    INFO, the default format and root_shell.log in the working directory.

    Every command sent to the privileged shell is logged at DEBUG level,
    so the log file should not be world readable when that level is used.

    Args:
        config: Config instance
    """
    log_level = LOG_LEVELS.get(
        str(config.get_setting("logging", "logging_level", "INFO")).upper(), logging.INFO
    )
    log_format = config.get_setting("logging", "log_format", DEFAULT_LOG_FORMAT)
    log_file_path = config.get_setting("logging", "log_file_path", "root_shell.log")
    max_log_size = config.get_setting("logging", "max_log_size", 1024 * 1024)
    backup_count = config.get_setting("logging", "backup_count", 3)

    formatter = logging.Formatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    log_dir = os.path.dirname(log_file_path)

    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=max_log_size,
        backupCount=backup_count
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    logging.info(f"Log file created at {log_file_path}")

    # Only critical errors reach the console, stderr belongs to the shell
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.CRITICAL)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.debug("Logging system initialized")
