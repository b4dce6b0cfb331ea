#!/usr/bin/python3
"""
address.py

This module provides the Address value type and the syntax check every
recipient, sender and reply-to address goes through before it reaches a draft.

Classes:
--------
Address
    An immutable mailbox with an optional display name.

Functions:
----------
validate_address(raw, display_name=None)
    Parses "box@host.tld" or "Name <box@host.tld>" into an Address.

Usage:
```python
addr = validate_address("Jane Doe <jane@example.com>")
addr.mailbox       # "jane@example.com"
addr.display_name  # "Jane Doe"
```

Exceptions:
-----------
InvalidAddressError
    Raised when the address doesn't match the mailbox grammar. No DNS lookup is made.
"""
from dataclasses import dataclass
from email.utils import formataddr
import re
from custom_errors import InvalidAddressError

MAILBOX_REGEX = re.compile(
    r"^[A-Za-z0-9._%+-]+@"                                # local part
    r"("                                                  # start domain group
    r"[A-Za-z0-9.-]+\.[A-Za-z]{2,24}"                     # domain.name
    r"|\[[0-9]{1,3}(\.[0-9]{1,3}){3}\]"                   # or [IPv4]
    r"|\[IPv6:[0-9a-fA-F:]+\]"                            # IPv6 literal
    r")$"
)

# "Display Name <box@host>", the name may be quoted or missing.
NAMED_ADDRESS_REGEX = re.compile(r'^(?P<name>[^<>]*?)\s*<(?P<mailbox>[^<>]*)>$')


@dataclass(frozen=True)
class Address:
    """
    A validated email address.

    Attributes
    ----------
    mailbox : str
        The local-part@domain portion.
    display_name : str, optional
        The personal name shown next to the mailbox.
    """
    mailbox: str
    display_name: str | None = None

    def __str__(self):
        if self.display_name:
            return formataddr((self.display_name, self.mailbox))
        return self.mailbox


def is_valid_mailbox(mailbox: str) -> bool:
    if not isinstance(mailbox, str) or MAILBOX_REGEX.fullmatch(mailbox) is None:
        return False

    domain = mailbox.rsplit("@", 1)[1]
    if domain.startswith("["):
        return True

    # Every label between dots must be non-empty and can't start or end with "-".
    return all(label and not label.startswith("-") and not label.endswith("-")
               for label in domain.split("."))


def validate_address(raw: str, display_name: str | None = None) -> Address:
    """
    Parses and validates a single address.

    Parameters
    ----------
    raw : str
        Either a bare mailbox or the "Name <mailbox>" form.
    display_name : str, optional
        Overrides the name parsed out of raw.

    Returns
    -------
    Address

    Raises
    ------
    InvalidAddressError
        If raw isn't a string or its mailbox part is malformed.
    """
    if not isinstance(raw, str):
        raise InvalidAddressError(f"Email address must be a string. Found: {type(raw).__name__}")

    text = raw.strip()
    parsed_name = None

    match = NAMED_ADDRESS_REGEX.fullmatch(text)
    if match:
        mailbox = match.group("mailbox").strip()
        parsed_name = match.group("name").strip()
        if len(parsed_name) >= 2 and parsed_name[0] == parsed_name[-1] == '"':
            parsed_name = parsed_name[1:-1].replace('\\"', '"')
    else:
        mailbox = text

    # Leading/trailing dots and ".." are legal for the regex but not for RFC 5322.
    local_part = mailbox.split("@", 1)[0]
    if not is_valid_mailbox(mailbox) or local_part.startswith(".") or local_part.endswith(".") or ".." in mailbox:
        raise InvalidAddressError(f"Invalid email address: {raw}")

    if display_name is not None:
        if not isinstance(display_name, str):
            raise InvalidAddressError(f"Display name must be a string. Found: {type(display_name).__name__}")
        parsed_name = display_name.strip()

    return Address(mailbox=mailbox, display_name=parsed_name or None)
