#!/usr/bin/python3
"""
transport_config.py

This module holds the SMTP endpoint settings a draft hands over to the
transport that eventually delivers it. Nothing here opens a connection; the
settings are only stored and checked.

Classes:
--------
TransportConfig
    Host, port and socket timeouts, loadable from a .env file.

Usage:
```python
config = TransportConfig.from_env("env-files/smtp.env")
config.validate()
```

Exceptions:
-----------
TransportConfigError
    Raised when the host or port can't be used to reach a server.
EnvFileNotLoadedError
    Raised when the .env file is missing or incorrectly formatted.
EnvVariableNotFoundError
    Raised when SMTP_SERVER or SMTP_PORT is missing from the .env file.
"""
import os
from dataclasses import dataclass, replace
from env_handler import EnvHandler
from custom_errors import TransportConfigError

DEFAULT_SMTP_PORT = 25
DEFAULT_TIMEOUT_MS = 60000


def check_timeout(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer number of milliseconds. Found: {value!r}")
    if value < 0:
        raise ValueError(f"{name} can't be negative. Found: {value}")
    return value


@dataclass(frozen=True)
class TransportConfig:
    """
    SMTP endpoint settings. Instances are immutable; use with_changes() to
    derive an updated copy.

    Attributes
    ----------
    host : str, optional
        The SMTP server host name. Required before a draft can be built.
    port : int
        The SMTP server port (default is 25).
    socket_connection_timeout : int
        Connect timeout in milliseconds (default is 60000).
    socket_timeout : int
        Read timeout in milliseconds (default is 60000).
    """
    host: str | None = None
    port: int = DEFAULT_SMTP_PORT
    socket_connection_timeout: int = DEFAULT_TIMEOUT_MS
    socket_timeout: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        check_timeout("socket_connection_timeout", self.socket_connection_timeout)
        check_timeout("socket_timeout", self.socket_timeout)

    @classmethod
    def from_env(cls, env: str = "env-files/smtp.env"):
        """
        Builds the settings from a .env file.

        Parameters
        ----------
        env : str, optional
            The path to the .env file, relative to the current working directory (default is "env-files/smtp.env").
            SMTP_SERVER and SMTP_PORT are required, SOCKET_CONNECTION_TIMEOUT and SOCKET_TIMEOUT are optional.

        Raises
        ------
        TransportConfigError
            If SMTP_PORT isn't an integer.
        """
        handler = EnvHandler(env=os.path.join(os.getcwd(), env))

        host = handler.load_var("SMTP_SERVER")
        try:
            port = handler.load_int("SMTP_PORT")
        except ValueError as e:
            raise TransportConfigError(str(e))

        return cls(
            host=host,
            port=port,
            socket_connection_timeout=handler.load_int("SOCKET_CONNECTION_TIMEOUT", default=DEFAULT_TIMEOUT_MS),
            socket_timeout=handler.load_int("SOCKET_TIMEOUT", default=DEFAULT_TIMEOUT_MS),
        )

    def validate(self):
        """
        Raises
        ------
        TransportConfigError
            If the host is missing, blank or contains whitespace, or the port isn't an integer in 1-65535.
        """
        if not isinstance(self.host, str) or not self.host.strip():
            raise TransportConfigError("SMTP host name is not set.")

        if any(char.isspace() for char in self.host.strip()):
            raise TransportConfigError(f"SMTP host name is malformed: {self.host!r}")

        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise TransportConfigError(f"SMTP port must be an integer. Found: {self.port!r}")

        if not 1 <= self.port <= 65535:
            raise TransportConfigError(f"SMTP port must be between 1 and 65535. Found: {self.port}")

    def with_changes(self, **changes):
        """Returns a copy with the given fields replaced, timeouts re-checked."""
        return replace(self, **changes)
