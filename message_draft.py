#!/usr/bin/python3
"""
message_draft.py

This module provides the MessageDraft class for composing an email before it is
handed to a transport. Every setter validates its input immediately; build()
only performs the checks that need the whole draft (sender, recipients and
SMTP endpoint) and returns an immutable MessageSnapshot.

Classes:
--------
MessageDraft
    A mutable, reusable message under composition.

Usage:
```python
draft = MessageDraft(transport=TransportConfig(host="smtp.example.com", port=587))
draft.set_from("alerts@example.com", "Alerts")
draft.add_to(["ops@example.com", "dev@example.com"])
draft.set_subject("Disk usage")
draft.set_content("Disk /var is at 91%.")
snapshot = draft.build()
```

Exceptions:
-----------
InvalidAddressError
    Raised when an address passed to a setter is malformed.
InvalidHeaderError
    Raised when a header name or value is empty or unsafe.
MissingSenderError
    Raised by build() when no From address was set.
MissingRecipientError
    Raised by build() when there is no To, Cc or Bcc recipient.
TransportConfigError
    Raised by build() when the SMTP host or port is missing or malformed.
"""
import datetime
import re
from address import Address, validate_address
from logger import Logger, LOGGING_CATEGORY
from message_snapshot import MessageSnapshot
from transport_config import TransportConfig
from custom_errors import *

CONTENT_TYPE_REGEX = re.compile(r"^[A-Za-z0-9!#$&^_.+-]+/[A-Za-z0-9!#$&^_.+-]+$")
HEADER_NAME_REGEX = re.compile(r"^[!-9;-~]+$")  # printable ASCII except ":"


class MessageDraft:
    """
    An email under composition.

    Attributes
    ----------
    logger : Logger, optional
        Receives one entry per build() call.

    Methods
    -------
    set_from(email, name=None) / get_from_address()
    add_to(emails, name=None) / add_cc(...) / add_bcc(...) / add_reply_to(email, name=None)
    set_to(emails) / set_cc(...) / set_bcc(...) / set_reply_to(...)
    add_header(name, value) / get_header(name) / get_headers() / remove_header(name)
    set_subject(subject) / set_content(content, content_type="text/plain") / set_charset(charset)
    set_sent_date(date) / set_host_name(host) / set_smtp_port(port)
    set_socket_connection_timeout(ms) / set_socket_timeout(ms)
    build() -> MessageSnapshot
    """
    def __init__(self, transport: TransportConfig | None = None, logger: Logger | None = None):
        """
        Parameters
        ----------
        transport : TransportConfig, optional
            SMTP endpoint settings. A default (no host, port 25) is used when omitted.
        logger : Logger, optional
            Where build() results are written. Nothing is logged when omitted.
        """
        if logger is not None and not isinstance(logger, Logger):
            raise TypeError("logger must be a Logger instance.")

        self.logger = logger
        self._transport = transport if transport is not None else TransportConfig()
        self._from = None
        self._to = []
        self._cc = []
        self._bcc = []
        self._reply_to = []
        self._headers = {}
        self._subject = ""
        self._content = ""
        self._content_type = "text/plain"
        self._charset = "utf-8"
        self._sent_date = datetime.datetime.now().astimezone()

    def __log(self, msg, category=LOGGING_CATEGORY.INFO):
        if self.logger:
            return self.logger.write_log("MessageDraft", category, msg)

    def __validate_batch(self, emails, name=None):
        """
        Validates every address before any list is touched, so a bad entry
        leaves the draft unchanged.
        """
        if isinstance(emails, str):
            return [validate_address(emails, name)]

        if not isinstance(emails, (list, tuple)):
            raise InvalidAddressError(f"Expected an address or a list of addresses. Found: {type(emails).__name__}")

        if name is not None:
            raise ValueError("A display name can only be given together with a single address.")

        return [validate_address(email) for email in emails]

    # Sender
    def set_from(self, email: str, name: str | None = None):
        self._from = validate_address(email, name)
        return self

    def get_from_address(self) -> Address | None:
        return self._from

    # Recipients
    def add_to(self, emails: str | list[str], name: str | None = None):
        """Appends one address, or a list of addresses, to the To list."""
        self._to.extend(self.__validate_batch(emails, name))
        return self

    def add_cc(self, emails: str | list[str], name: str | None = None):
        """Appends one address, or a list of addresses, to the Cc list."""
        self._cc.extend(self.__validate_batch(emails, name))
        return self

    def add_bcc(self, emails: str | list[str], name: str | None = None):
        """Appends one address, or a list of addresses, to the Bcc list."""
        self._bcc.extend(self.__validate_batch(emails, name))
        return self

    def add_reply_to(self, email: str, name: str | None = None):
        self._reply_to.append(validate_address(email, name))
        return self

    def __replace(self, emails, kind):
        addresses = self.__validate_batch(emails)
        if not addresses:
            raise InvalidAddressError(f"{kind} address list provided was empty.")
        return addresses

    def set_to(self, emails: list[str]):
        """Replaces the To list. An empty list is rejected."""
        self._to = self.__replace(emails, "To")
        return self

    def set_cc(self, emails: list[str]):
        self._cc = self.__replace(emails, "Cc")
        return self

    def set_bcc(self, emails: list[str]):
        self._bcc = self.__replace(emails, "Bcc")
        return self

    def set_reply_to(self, emails: list[str]):
        self._reply_to = self.__replace(emails, "Reply-To")
        return self

    def get_to_addresses(self) -> list[Address]:
        return list(self._to)

    def get_cc_addresses(self) -> list[Address]:
        return list(self._cc)

    def get_bcc_addresses(self) -> list[Address]:
        return list(self._bcc)

    def get_reply_to_addresses(self) -> list[Address]:
        return list(self._reply_to)

    # Headers
    def add_header(self, name: str, value: str):
        """
        Sets a custom header. Names are case-insensitive: adding the same name
        again, in any case, overwrites the earlier entry.

        Raises
        ------
        InvalidHeaderError
            If name or value is empty, name contains ":" or whitespace, value contains
            a line break, or name is a MIME header owned by set_content().
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidHeaderError("Header name can't be empty.")

        if not isinstance(value, str) or not value.strip():
            raise InvalidHeaderError(f"Value of header {name} can't be empty.")

        if not HEADER_NAME_REGEX.fullmatch(name):
            raise InvalidHeaderError(f"Invalid header name: {name!r}")

        if "\r" in value or "\n" in value:
            raise InvalidHeaderError(f"Value of header {name} can't contain line breaks.")

        if name.lower().startswith("content-") or name.lower() == "mime-version":
            raise InvalidHeaderError(f"Header {name} is derived from the content. Use set_content() instead.")

        # lower-cased name -> (name as last given, value)
        self._headers[name.lower()] = (name, value)
        return self

    def get_header(self, name: str) -> str | None:
        if not isinstance(name, str):
            return None
        entry = self._headers.get(name.lower())
        return entry[1] if entry else None

    def get_headers(self) -> dict:
        return dict(self._headers.values())

    def remove_header(self, name: str):
        if isinstance(name, str):
            self._headers.pop(name.lower(), None)
        return self

    # Content
    def set_subject(self, subject: str):
        if not isinstance(subject, str):
            raise TypeError("Subject must be a string.")
        self._subject = subject
        return self

    def get_subject(self) -> str:
        return self._subject

    def set_content(self, content: str, content_type: str = "text/plain"):
        """
        Raises
        ------
        ValueError
            If content_type doesn't look like "type/subtype", or the content can't
            be encoded in the draft's charset.
        """
        if not isinstance(content, str):
            raise TypeError("Content must be a string.")

        if not isinstance(content_type, str) or not CONTENT_TYPE_REGEX.fullmatch(content_type.strip()):
            raise ValueError(f"Invalid content type: {content_type!r}")

        self.__check_encodable(content, self._charset)
        self._content = content
        self._content_type = content_type.strip().lower()
        return self

    def get_content(self) -> str:
        return self._content

    def get_content_type(self) -> str:
        return self._content_type

    def __check_encodable(self, content, charset):
        try:
            content.encode(charset)
        except UnicodeEncodeError as e:
            raise ValueError(f"Content can't be encoded as {charset}: {e.reason} at position {e.start}")

    def set_charset(self, charset: str):
        """
        Raises
        ------
        ValueError
            If charset isn't a known text encoding, or the current content can't be encoded in it.
        """
        if not isinstance(charset, str) or not charset.strip():
            raise ValueError(f"Unknown charset: {charset!r}")

        # str.encode rejects bytes-to-bytes codecs such as rot13 or base64.
        try:
            "".encode(charset.strip())
        except LookupError:
            raise ValueError(f"Unknown charset: {charset!r}")

        self.__check_encodable(self._content, charset.strip())
        self._charset = charset.strip()
        return self

    def get_charset(self) -> str:
        return self._charset

    def set_sent_date(self, date: datetime.datetime):
        if not isinstance(date, datetime.datetime):
            raise TypeError("Sent date must be a datetime.")
        self._sent_date = date
        return self

    def get_sent_date(self) -> datetime.datetime:
        return self._sent_date

    # Transport settings
    def set_host_name(self, host: str):
        self._transport = self._transport.with_changes(host=host)
        return self

    def get_host_name(self) -> str | None:
        return self._transport.host

    def set_smtp_port(self, port: int):
        self._transport = self._transport.with_changes(port=port)
        return self

    def get_smtp_port(self) -> int:
        return self._transport.port

    def set_socket_connection_timeout(self, timeout: int):
        self._transport = self._transport.with_changes(socket_connection_timeout=timeout)
        return self

    def get_socket_connection_timeout(self) -> int:
        return self._transport.socket_connection_timeout

    def set_socket_timeout(self, timeout: int):
        self._transport = self._transport.with_changes(socket_timeout=timeout)
        return self

    def get_socket_timeout(self) -> int:
        return self._transport.socket_timeout

    def get_transport_config(self) -> TransportConfig:
        return self._transport

    # Assembly
    def build(self) -> MessageSnapshot:
        """
        Produces an immutable snapshot of the draft. The draft stays usable and
        later changes don't affect snapshots that were already built.

        Raises
        ------
        MissingSenderError
            If set_from() was never called.
        MissingRecipientError
            If To, Cc and Bcc are all empty.
        TransportConfigError
            If the SMTP host is missing or the port is outside 1-65535.
        """
        try:
            if self._from is None:
                raise MissingSenderError("From address required.")

            if not (self._to or self._cc or self._bcc):
                raise MissingRecipientError("At least one receiver address required.")

            self._transport.validate()
        except EmailError as e:
            self.__log(f"Failed to build message '{self._subject}': {type(e).__name__}: {e}", LOGGING_CATEGORY.ERROR)
            raise

        snapshot = MessageSnapshot(
            from_address=self._from,
            to=self._to,
            cc=self._cc,
            bcc=self._bcc,
            reply_to=self._reply_to,
            headers=self.get_headers(),
            subject=self._subject,
            content=self._content,
            content_type=self._content_type,
            charset=self._charset,
            sent_date=self._sent_date,
            transport=self._transport,
        )

        counts = snapshot.recipient_counts
        self.__log(
            f"Built message '{self._subject}' from {self._from.mailbox} "
            f"(To={counts['To']}, Cc={counts['Cc']}, Bcc={counts['Bcc']}) via {self._transport.host}:{self._transport.port}."
        )
        return snapshot
