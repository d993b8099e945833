"""Provider-independent message model.

A :class:`Message` is assembled incrementally by an adapter's builder
methods and lives only for the duration of one ``send()`` call.

Contents:
    * :class:`Address` - display name and email pair.
    * :class:`AttachmentSource` - a file path or byte stream waiting to be read.
    * :class:`Attachment` - a resolved, base64-ready attachment.
    * :class:`Message` - sender, recipients, subject, bodies and attachments.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from .enums import Disposition


@dataclass(frozen=True, slots=True)
class Address:
    """An email address with an optional display name.

    Example:
        >>> Address("Jane Doe", "jane@example.com").format()
        'Jane Doe <jane@example.com>'
        >>> Address("", "jane@example.com").format()
        'jane@example.com'
    """

    name: str
    email: str

    def format(self) -> str:
        """Return the RFC 5322 style ``Name <email>`` form."""
        if not self.name:
            return self.email
        return f"{self.name} <{self.email}>"


def join_addresses(addresses: list[Address]) -> str:
    """Comma-join formatted addresses, as expected by form and string fields.

    Example:
        >>> join_addresses([Address("A", "a@x.io"), Address("", "b@x.io")])
        'A <a@x.io>,b@x.io'
        >>> join_addresses([])
        ''
    """
    return ",".join(address.format() for address in addresses)


@dataclass(frozen=True, slots=True)
class AttachmentSource:
    """Reference to attachment data that is read at send time.

    Exactly one of ``path`` or ``stream`` is set. ``filename`` is the logical
    name shown to recipients and the basis for MIME type detection.
    """

    filename: str
    disposition: Disposition
    path: Path | None = None
    stream: IO[bytes] | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_path(cls, path: str | Path, disposition: Disposition) -> AttachmentSource:
        """Build a file-backed source; the filename is the final path segment."""
        resolved = Path(path)
        return cls(filename=resolved.name, disposition=disposition, path=resolved)

    @classmethod
    def from_stream(cls, filename: str, stream: IO[bytes], disposition: Disposition) -> AttachmentSource:
        """Build a stream-backed source under the given logical filename."""
        return cls(filename=Path(filename).name, disposition=disposition, stream=stream)


@dataclass(frozen=True, slots=True)
class Attachment:
    """A fully read attachment ready for any provider's wire format.

    Example:
        >>> a = Attachment(filename="a.txt", mime_type="text/plain", data=b"hi",
        ...                disposition=Disposition.ATTACHMENT)
        >>> a.content
        'aGk='
        >>> a.content_id
        'a.txt'
        >>> a.size
        2
    """

    filename: str
    mime_type: str
    data: bytes = field(repr=False)
    disposition: Disposition
    content_id: str = ""

    def __post_init__(self) -> None:
        if not self.content_id:
            object.__setattr__(self, "content_id", self.filename)

    @property
    def content(self) -> str:
        """Base64 (standard alphabet, padded) encoding of the raw bytes."""
        return base64.b64encode(self.data).decode("ascii")

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_inline(self) -> bool:
        return self.disposition is Disposition.INLINE


@dataclass(slots=True)
class Message:
    """Mutable message state owned by a single adapter instance."""

    sender: Address | None = None
    to: list[Address] = field(default_factory=list)
    cc: list[Address] = field(default_factory=list)
    bcc: list[Address] = field(default_factory=list)
    reply_to: Address | None = None
    subject: str = ""
    body_text: str = ""
    body_html: str = ""
    attachments: list[AttachmentSource] = field(default_factory=list)

    @property
    def recipient_count(self) -> int:
        """Combined number of to, cc and bcc recipients."""
        return len(self.to) + len(self.cc) + len(self.bcc)


__all__ = [
    "Address",
    "Attachment",
    "AttachmentSource",
    "Message",
    "join_addresses",
]
