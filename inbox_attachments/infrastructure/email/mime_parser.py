# infrastructure/email/mime_parser.py
from __future__ import annotations
import logging
import pyzmail
from inbox_attachments.domain.models import ParsedMail, Attachment

logger = logging.getLogger(__name__)

UID_HEADER = "Imap-Id"

def with_uid_header(uid: int, raw: bytes) -> bytes:
    return f"{UID_HEADER}: {uid}\r\n".encode("ascii") + raw

def parse_mail(raw: bytes) -> ParsedMail:
    """
    Decodes an RFC822 message. The UID is read back from the synthetic
    `Imap-Id` header (see with_uid_header); 0 when the header is absent.
    """
    msg = pyzmail.PyzMessage.factory(raw)

    uid_text = str(msg.get_decoded_header(UID_HEADER.lower(), "") or "").strip()
    uid = int(uid_text) if uid_text.isdigit() else 0
    subject = msg.get_subject() or ""

    atts: list[Attachment] = []
    for part in msg.mailparts:
        if part.is_body:
            continue
        payload = part.get_payload()
        if isinstance(payload, bytes):
            atts.append(Attachment(
                filename=part.filename or None,
                content=payload,
                content_type=part.type or "application/octet-stream",
            ))
        else:
            logger.debug("UID=%s: skipping part %s without a binary payload", uid, part.type)

    return ParsedMail(uid=uid, subject=subject, attachments=atts)
