#!/usr/bin/python3

class EnvFileNotLoadedError(Exception):
    """Custom error class to raise errors when the script fails to read .env file."""
    pass

class EnvVariableNotFoundError(Exception):
    """Custom error class to raise errors when a variable is not found in the .env file."""
    pass

class EnvVariableEmptyError(Exception):
    """Custom error class to raise errors when a variable is empty in the .env file."""
    pass

class EmailError(Exception):
    """Base class for every error raised while composing a message."""
    pass

class EmailValidationError(EmailError):
    """Raised when a draft field fails validation."""
    pass

class InvalidAddressError(EmailValidationError):
    """Raised when the provided email address is malformed."""
    pass

class InvalidHeaderError(EmailValidationError):
    """Raised when a header name or value is empty or unsafe."""
    pass

class MissingSenderError(EmailValidationError):
    """Raised when a message is built without a From address."""
    pass

class MissingRecipientError(EmailValidationError):
    """Raised when a message is built without any To, Cc or Bcc recipient."""
    pass

class TransportConfigError(EmailError):
    """Raised when the SMTP host or port can't be handed to a transport."""
    pass
