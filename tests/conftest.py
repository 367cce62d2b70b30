"""Shared fixtures: an in-memory mailbox standing in for IMAPInbox, and raw mail builders."""

from __future__ import annotations

import json
from email.message import EmailMessage

import pytest

from inbox_attachments.domain.errors import MailboxConnectionError, MailboxError, MailDecodeError
from inbox_attachments.domain.models import Attachment, ParsedMail


def build_raw_mail(subject=None, attachments=(), body="Hello"):
    """RFC822 bytes with a text body and (filename, content, mime type) attachments."""
    msg = EmailMessage()
    msg["From"] = "sender@example.com"
    msg["To"] = "inbox@example.com"
    if subject is not None:
        msg["Subject"] = subject
    msg.set_content(body)
    for filename, content, mime in attachments:
        maintype, subtype = mime.split("/")
        msg.add_attachment(content, maintype=maintype, subtype=subtype, filename=filename)
    return msg.as_bytes()


class FakeInbox:
    """Mimics IMAPInbox over a dict of uid -> ParsedMail (or an exception to raise on fetch)."""

    def __init__(self, messages=None, *, fail_on=None):
        self.messages = dict(messages or {})
        self.fail_on = fail_on
        self.flagged = []
        self.expunged = []
        self.selected = None
        self.closed = False
        self.logged_out = False

    def __call__(self, config):
        self.config = config
        return self

    def __enter__(self):
        if self.fail_on == "connect":
            raise MailboxConnectionError("connection refused")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.logged_out = True

    def select_folder(self, folder):
        self.selected = folder

    def search_all(self):
        if self.fail_on == "search":
            raise MailboxError("search failed")
        return list(self.messages)

    def fetch_mail(self, uid):
        item = self.messages[uid]
        if isinstance(item, Exception):
            raise item
        return item

    def mark_deleted(self, uid):
        self.flagged.append(uid)

    def close_folder(self):
        if self.fail_on == "close":
            raise MailboxError("close failed")
        self.closed = True
        self.expunged = list(self.flagged)
        for uid in self.flagged:
            self.messages.pop(uid, None)


@pytest.fixture
def mail_with_attachment():
    return ParsedMail(
        uid=1,
        subject="invoices/march",
        attachments=[Attachment(filename="invoice.pdf", content=b"%PDF-1", content_type="application/pdf")],
    )


@pytest.fixture
def undecodable():
    return MailDecodeError(99, "cannot decode message")


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "email.conf"
    path.write_text(json.dumps({
        "user": "me@example.com",
        "password": "secret",
        "host": "imap.example.com",
        "port": 993,
        "tls": True,
    }), encoding="utf-8")
    return path
