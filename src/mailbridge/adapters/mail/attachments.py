"""Attachment resolution: size accounting, reading and MIME detection.

File attachments are sized with ``stat`` before anything is read so an
oversized payload is rejected without loading it. Stream attachments have
to be drained to learn their size; their bytes are kept for encoding.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence

from ...domain.errors import InvalidMessageError
from ...domain.limits import ProviderLimits, check_attachment_size
from ...domain.message import Attachment, AttachmentSource

logger = logging.getLogger(__name__)


def guess_mime_type(filename: str) -> str:
    """Return the MIME type for a filename's extension, or ``""`` when unknown.

    Examples:
        >>> guess_mime_type("report.pdf")
        'application/pdf'
        >>> guess_mime_type("notes.unknownext")
        ''
    """
    mime_type, _ = mimetypes.guess_type(filename, strict=False)
    return mime_type or ""


def _read_stream(source: AttachmentSource) -> bytes:
    if source.stream is None:
        raise InvalidMessageError(f"attachment {source.filename!r} has neither a path nor a stream")
    return source.stream.read()


def load_attachments(sources: Sequence[AttachmentSource], limits: ProviderLimits) -> list[Attachment]:
    """Resolve attachment sources into encoded attachments.

    Args:
        sources: Sources in the order they were added to the message.
        limits: Ceilings of the provider that will carry the message.

    Returns:
        One :class:`Attachment` per source, order preserved.

    Raises:
        FileNotFoundError: A file attachment does not exist.
        AttachmentTooLargeError: Combined size exceeds the provider ceiling.
    """
    stream_data: dict[int, bytes] = {}
    total = 0
    for index, source in enumerate(sources):
        if source.path is not None:
            total += source.path.stat().st_size
        else:
            data = _read_stream(source)
            stream_data[index] = data
            total += len(data)

    check_attachment_size(total, limits)

    attachments: list[Attachment] = []
    for index, source in enumerate(sources):
        data = source.path.read_bytes() if source.path is not None else stream_data[index]
        attachments.append(
            Attachment(
                filename=source.filename,
                mime_type=guess_mime_type(source.filename),
                data=data,
                disposition=source.disposition,
            )
        )

    if attachments:
        logger.debug(
            "Resolved attachments",
            extra={"driver": limits.driver.value, "count": len(attachments), "total_bytes": total},
        )
    return attachments


__all__ = [
    "guess_mime_type",
    "load_attachments",
]
