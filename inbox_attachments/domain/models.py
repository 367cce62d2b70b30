# domain/models.py
from __future__ import annotations
from dataclasses import dataclass, field

@dataclass
class Attachment:
    filename: str | None
    content: bytes
    content_type: str = "application/octet-stream"

@dataclass
class ParsedMail:
    uid: int
    subject: str
    attachments: list[Attachment] = field(default_factory=list)

    def has_attachments(self) -> bool:
        return bool(self.attachments)
