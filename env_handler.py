#!/usr/bin/python3
import os
from dotenv import load_dotenv
from custom_errors import EnvFileNotLoadedError, EnvVariableEmptyError, EnvVariableNotFoundError

"""
A handler for reading mail settings from .env files.
The file is loaded once through python-dotenv, afterwards variables are read
from the process environment so exported values win over the file.
Attributes
----------
    _file_loaded : bool
        Indicates whether the .env file was successfully loaded.
    Parameters
----------
    env : str
        The file path to the .env file to be loaded.
    TypeError
        If the provided environment file path is not a string.
    EnvFileNotLoadedError
        If the .env file fails to load.
Examples
--------
>>> env_handler = EnvHandler("env-files/smtp.env")
>>> host = env_handler.load_var("SMTP_SERVER")
>>> timeout = env_handler.load_int("SOCKET_TIMEOUT", default=60000)
"""

_MISSING = object()

class EnvHandler:
    def __init__(self, env: str):
        """
        Load the given .env file into the process environment.
        Parameters
        ----------
        env : str
            Path to the environment file (.env) to be loaded.
        Raises
        ------
        TypeError
            If the provided environment path is not a string.
        EnvFileNotLoadedError
            If python-dotenv reports that nothing was loaded.
        """
        if not isinstance(env, str):
            raise TypeError("Environment's File Path should be a string.")

        self.env = env
        self._file_loaded = load_dotenv(env)

        if not self._file_loaded:
            raise EnvFileNotLoadedError(f"Failed to load .env file at {env}. Ensure the file exists and is correctly formatted.")

    def load_var(self, var: str, default=_MISSING):
        """
        Reads a variable, falling back to default when one is given.

        Raises
        ------
        EnvVariableNotFoundError:
            If the variable is missing and no default was given.
        EnvVariableEmptyError:
            If the variable is set to an empty string and no default was given.
        """
        value = os.getenv(var)

        if value is None:
            if default is not _MISSING:
                return default
            raise EnvVariableNotFoundError(f"Environment variable {var} is missing.")

        if value.strip() == "":
            if default is not _MISSING:
                return default
            raise EnvVariableEmptyError(f"Environment variable {var} is empty.")

        return value.strip()

    def load_int(self, var: str, default=_MISSING):
        """
        Reads a variable and converts it to an integer.

        Raises
        ------
        ValueError:
            If the value isn't a valid integer.
        """
        value = self.load_var(var, default)
        if value is default:
            return value
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{var} must be an integer. Found: {value}")
