#!/usr/bin/python3
"""
    LOGGER

    This module provides the file logger used by the message drafts.

    Classes
    ----------
        LOGGING_CATEGORY:
            Enum representing log levels (ERROR, WARNING, INFO).
        Logger:
            Appends timestamped entries to a log file, filtered by verbosity.

    Usage
    ----------
    ```python
    logger = Logger("log-files/mail.log", logging_level=3)
    logger.write_log("MessageDraft", LOGGING_CATEGORY.INFO, "Built message 'Hello' for 2 recipients.")
    ```
"""
from enum import Enum
import datetime
import os
import time
import threading

class LOGGING_CATEGORY(Enum):
    """Enum representing log categories for logging."""
    ERROR = 1
    WARNING = 2
    INFO = 3


class Logger:
    """
    File logger shared by the drafts of one application.

    Attributes
    ----------
    log_file: str
        Path to the log file.
    logging_level: int
        Determines the log detail level:
            0 - Don't log anything
            1 - Log only errors.
            2 - Log errors and warnings.
            3 - Log errors, warnings, and information.

    Methods
    -------
    write_log(source: str, category: LOGGING_CATEGORY, msg: str)
        Appends an entry to the log file.
    """
    MAX_RETRIES = 5

    def __init__(self, log_file: str, logging_level=1):
        """
        Parameters:
        ----------
        log_file: str
            Path to the log file. Missing parent directories are created.
        logging_level: int, optional
            Specifies log verbosity (default is 1).

        Raises
        ------
        ValueError
            If logging_level isn't one of 0-3 or log_file isn't a non-empty string.
        IOError
            If the log file can't be created.
        """
        acceptable_values = {0, 1, 2, 3}
        if isinstance(logging_level, bool) or not isinstance(logging_level, int) or logging_level not in acceptable_values:
            raise ValueError(f"Logging level must be one of {acceptable_values}.")

        if not isinstance(log_file, str) or not log_file:
            raise ValueError("Log file must be a non-empty string.")

        self.logging_level = logging_level
        self.log_file = log_file
        self._lock = threading.Lock()
        self.__ensure_log_file()

    def __ensure_log_file(self):
        with self._lock:
            try:
                directory = os.path.dirname(self.log_file)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                if not os.path.exists(self.log_file):
                    with open(self.log_file, "w") as _:
                        pass
            except OSError as e:
                raise IOError(f"Unable to access or create log file '{self.log_file}': {e}")

    def is_enabled(self, category: LOGGING_CATEGORY) -> bool:
        """Returns True if entries of this category pass the verbosity filter."""
        return self.logging_level >= category.value

    def write_log(self, source: str, category: LOGGING_CATEGORY, msg: str):
        """
        Appends an entry to the log file.

        Parameters:
        ----------
        source: str
            Name of the class or function writing the entry.
        category: LOGGING_CATEGORY
            The log category (ERROR, WARNING, INFO).
        msg: str
            The log message.

        Returns
        -------
        bool
            True if the entry was written, False if the verbosity filtered it out.

        Raises
        ------
        ValueError
            If source or msg is not a non-empty string, or if category is not a LOGGING_CATEGORY.
        PermissionError
            If the log file stays locked by another process.
        """
        if not isinstance(source, str) or not source:
            raise ValueError("source must be a non-empty string.")

        if not isinstance(category, LOGGING_CATEGORY):
            raise ValueError("Invalid category. Must be an instance of LOGGING_CATEGORY.")

        if not isinstance(msg, str) or not msg:
            raise ValueError("msg must be a non-empty string.")

        if not self.is_enabled(category):
            return False

        # Newlines would split one entry over several lines.
        msg = " ".join(msg.splitlines())

        with self._lock:
            backoff_time = 0.1
            for attempt in range(1, self.MAX_RETRIES + 1):
                try:
                    with open(self.log_file, mode="a+", encoding="utf-8") as log_file:
                        timestamp = datetime.datetime.now().strftime('%Y/%m/%d %H:%M:%S')
                        log_file.write(f"{timestamp} {source}: {category.name} - {msg}\n")
                    return True
                except PermissionError:
                    # Locked by another process, not another thread.
                    if attempt == self.MAX_RETRIES:
                        raise PermissionError(f"Log file '{self.log_file}' is locked by another process.")
                    time.sleep(backoff_time)
                    backoff_time *= 2
