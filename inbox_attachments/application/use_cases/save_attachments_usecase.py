# application/use_cases/save_attachments_usecase.py
from __future__ import annotations
import logging
from pathlib import Path

from inbox_attachments.domain.models import ParsedMail
from inbox_attachments.domain.path_sanitizer import sanitize_subject
from inbox_attachments.infrastructure.filesystem.storage import OutputDirectory

logger = logging.getLogger(__name__)

class SaveAttachmentsUseCase:
    def __init__(self, storage: OutputDirectory) -> None:
        self.storage = storage

    def process_mail(self, mail: ParsedMail) -> list[Path]:
        """
        Writes every attachment under <output>/<sanitized subject>/.
        Mails without subject or attachments are skipped: nothing is created.
        Same-name attachments overwrite each other, the last one wins.
        """
        if not mail.subject or not mail.has_attachments():
            return []

        folder = sanitize_subject(mail.subject)
        saved: list[Path] = []
        for att in mail.attachments:
            fp = self.storage.save_bytes(folder, att.filename, att.content)
            logger.info("Attachment saved to %s", fp)
            saved.append(fp)
        return saved
