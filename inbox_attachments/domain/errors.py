# domain/errors.py
from __future__ import annotations


class InboxAttachmentsError(Exception):
    """Base class for every failure raised by this package."""


class ConfigError(InboxAttachmentsError):
    pass


class OutputDirectoryError(InboxAttachmentsError):
    pass


class MailboxError(InboxAttachmentsError):
    pass


class MailboxConnectionError(MailboxError):
    pass


class MailDecodeError(InboxAttachmentsError):
    def __init__(self, uid: int, reason: str) -> None:
        super().__init__(f"UID {uid}: {reason}")
        self.uid = uid
