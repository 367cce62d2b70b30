# interface_adapters/controllers/run_controller.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable

from inbox_attachments.application.use_cases.save_attachments_usecase import SaveAttachmentsUseCase
from inbox_attachments.config.email_config import ImapConfig
from inbox_attachments.config.settings import RunConfig
from inbox_attachments.domain.errors import MailboxError, MailDecodeError
from inbox_attachments.infrastructure.email.imap_client import IMAPInbox
from inbox_attachments.infrastructure.filesystem.storage import OutputDirectory

logger = logging.getLogger(__name__)

@dataclass
class RunReport:
    found: int = 0
    saved: list[int] = field(default_factory=list)
    deleted: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    closed: bool = False

    @property
    def ok(self) -> bool:
        return self.closed and not self.failed


class RunController:
    def __init__(
        self,
        run_config: RunConfig,
        imap_config: ImapConfig,
        *,
        inbox_factory: Callable[[ImapConfig], IMAPInbox] = IMAPInbox,
    ) -> None:
        self.run_config = run_config
        self.imap_config = imap_config
        self.inbox_factory = inbox_factory
        self.uc = SaveAttachmentsUseCase(OutputDirectory(run_config.output_dir))

    def _process_uid(self, inbox: IMAPInbox, uid: int, report: RunReport) -> None:
        try:
            mail = inbox.fetch_mail(uid)
        except MailDecodeError:
            logger.exception("Skipping UID=%s, could not fetch or decode it", uid)
            report.failed.append(uid)
            return

        logger.info("Parsing %s", mail.subject)
        try:
            self.uc.process_mail(mail)
        except (OSError, ValueError):
            logger.exception("Skipping UID=%s, could not write its attachments", uid)
            report.failed.append(uid)
            return
        report.saved.append(uid)

        if self.run_config.delete_after_parse:
            try:
                inbox.mark_deleted(uid)
                report.deleted.append(uid)
            except MailboxError:
                logger.exception("Could not flag UID=%s deleted", uid)
                report.failed.append(uid)

    def run_once(self) -> RunReport:
        """
        One full pass over the folder. Connection, selection and search errors
        propagate (MailboxError); per-message errors are logged and recorded in
        the report so the remaining messages are still processed.
        """
        report = RunReport()
        with self.inbox_factory(self.imap_config) as inbox:
            inbox.select_folder(self.run_config.folder)
            uids = inbox.search_all()
            report.found = len(uids)
            if not uids:
                logger.info("No mail detected")
            else:
                logger.info("Processing %d mails from %s", len(uids), self.run_config.folder)

            for uid in uids:
                self._process_uid(inbox, uid, report)

            try:
                inbox.close_folder()
                report.closed = True
            except MailboxError:
                logger.exception("Could not close %s, flagged mails were not expunged", self.run_config.folder)

        logger.info(
            "Done: %d found, %d saved, %d flagged deleted, %d failed",
            report.found, len(report.saved), len(report.deleted), len(report.failed),
        )
        return report
