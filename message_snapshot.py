#!/usr/bin/python3
"""
message_snapshot.py

This module provides MessageSnapshot, the read-only result of
MessageDraft.build(). A snapshot is what a transport receives: it can report
its recipients per type, list the envelope recipients, and render itself as a
single-part email.message.EmailMessage.

Usage:
```python
snapshot = draft.build()
snapshot.recipient_counts        # {"To": 1, "Cc": 0, "Bcc": 2}
message = snapshot.to_mime_message()
```
"""
from dataclasses import dataclass, field
from datetime import datetime
from email.message import EmailMessage
from email.utils import format_datetime
from types import MappingProxyType
from typing import Mapping
from address import Address
from transport_config import TransportConfig

RECIPIENT_TYPES = ("To", "Cc", "Bcc")


@dataclass(frozen=True)
class MessageSnapshot:
    """
    An immutable, fully validated message.

    Attributes
    ----------
    from_address : Address
    to : tuple[Address, ...]
    cc : tuple[Address, ...]
    bcc : tuple[Address, ...]
    reply_to : tuple[Address, ...]
    headers : Mapping[str, str]
        Custom headers exactly as they were added to the draft.
    subject : str
    content : str
    content_type : str
    charset : str
    sent_date : datetime
    transport : TransportConfig
        The draft's endpoint settings at build time (immutable).
    """
    from_address: Address
    to: tuple
    cc: tuple
    bcc: tuple
    reply_to: tuple
    headers: Mapping[str, str] = field(hash=False)
    subject: str
    content: str
    content_type: str
    charset: str
    sent_date: datetime
    transport: TransportConfig

    def __post_init__(self):
        # Freeze whatever the caller passed in.
        for name in ("to", "cc", "bcc", "reply_to"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def recipient_counts(self) -> dict:
        """Number of addresses per recipient type, duplicates included."""
        return {"To": len(self.to), "Cc": len(self.cc), "Bcc": len(self.bcc)}

    def get_recipients(self, kind: str) -> tuple:
        """
        Returns the addresses of one type.

        Parameters
        ----------
        kind : str
            "To", "Cc", "Bcc" or "Reply-To", case-insensitive.

        Raises
        ------
        ValueError
            If kind isn't one of the above.
        """
        lists = {"to": self.to, "cc": self.cc, "bcc": self.bcc, "reply-to": self.reply_to}
        key = kind.strip().lower().replace("_", "-") if isinstance(kind, str) else None
        if key not in lists:
            raise ValueError(f"Unknown recipient type: {kind!r}. Expected one of To, Cc, Bcc, Reply-To.")
        return lists[key]

    def envelope_recipients(self) -> list[str]:
        """All To, Cc and Bcc mailboxes in that order, as used for RCPT TO."""
        return [address.mailbox for address in self.to + self.cc + self.bcc]

    def to_mime_message(self) -> EmailMessage:
        """
        Renders the snapshot as a single-part message.

        Bcc addresses are left out of the headers; they only appear in
        envelope_recipients(). Custom headers are added last, verbatim.
        """
        msg = EmailMessage()
        msg["From"] = str(self.from_address)
        if self.to:
            msg["To"] = ", ".join(str(address) for address in self.to)
        if self.cc:
            msg["Cc"] = ", ".join(str(address) for address in self.cc)
        if self.reply_to:
            msg["Reply-To"] = ", ".join(str(address) for address in self.reply_to)
        if self.subject:
            msg["Subject"] = self.subject
        msg["Date"] = format_datetime(self.sent_date)

        maintype, subtype = self.content_type.split("/", 1)
        if maintype == "text":
            msg.set_content(self.content, subtype=subtype, charset=self.charset)
        else:
            msg.set_content(self.content.encode(self.charset), maintype=maintype, subtype=subtype)

        # set_content() clears Content-* headers, so these go on afterwards.
        for name, value in self.headers.items():
            if name in msg:
                del msg[name]
            msg[name] = value

        return msg
