# infrastructure/email/imap_client.py
from __future__ import annotations
import logging
import ssl
from imapclient import IMAPClient, DELETED
from imapclient.exceptions import IMAPClientError
from inbox_attachments.config.email_config import ImapConfig
from inbox_attachments.domain.errors import MailboxError, MailboxConnectionError, MailDecodeError
from inbox_attachments.domain.models import ParsedMail
from inbox_attachments.infrastructure.email.mime_parser import parse_mail, with_uid_header

logger = logging.getLogger(__name__)

# PEEK keeps \Seen untouched on messages that are not deleted
FETCH_BODY = "BODY.PEEK[]"
BODY_KEY = b"BODY[]"

class IMAPInbox:
    def __init__(self, config: ImapConfig) -> None:
        self.config = config
        self.client: IMAPClient | None = None

    def _ssl_context(self) -> ssl.SSLContext | None:
        if not self.config.tls:
            return None
        ctx = ssl.create_default_context()
        if not self.config.verify_certificate:
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE
        return ctx

    def __enter__(self) -> "IMAPInbox":
        cfg = self.config
        try:
            self.client = IMAPClient(
                cfg.host,
                port=cfg.port,
                ssl=cfg.tls,
                ssl_context=self._ssl_context(),
                timeout=cfg.timeout,
            )
            self.client.login(cfg.user, cfg.password)
        except (IMAPClientError, OSError) as e:
            raise MailboxConnectionError(f"Cannot connect to {cfg.host}:{cfg.port} as {cfg.user}: {e}") from e
        logger.info("Connected to %s:%s as %s", cfg.host, cfg.port, cfg.user)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.client:
                self.client.logout()
        except Exception:
            logger.exception("Error closing the IMAP connection")
        finally:
            self.client = None

    def _require_client(self) -> IMAPClient:
        if self.client is None:
            raise MailboxError("IMAP session is not open")
        return self.client

    def select_folder(self, folder: str) -> None:
        try:
            self._require_client().select_folder(folder, readonly=False)
        except (IMAPClientError, OSError) as e:
            raise MailboxError(f"Cannot open folder {folder}: {e}") from e

    def search_all(self) -> list[int]:
        try:
            return list(self._require_client().search(["ALL"]))
        except (IMAPClientError, OSError) as e:
            raise MailboxError(f"Search failed: {e}") from e

    def fetch_mail(self, uid: int) -> ParsedMail:
        try:
            resp = self._require_client().fetch([uid], [FETCH_BODY])
        except IMAPClientError as e:
            raise MailDecodeError(uid, f"fetch failed: {e}") from e
        except OSError as e:
            # lost connection: later messages cannot be fetched either
            raise MailboxError(f"Connection lost while fetching UID={uid}: {e}") from e

        data = resp.get(uid) or {}
        raw = data.get(BODY_KEY)
        if raw is None:
            raise MailDecodeError(uid, "server returned no message body")
        try:
            return parse_mail(with_uid_header(uid, raw))
        except Exception as e:
            raise MailDecodeError(uid, f"cannot decode message: {e}") from e

    def mark_deleted(self, uid: int) -> None:
        try:
            self._require_client().add_flags([uid], [DELETED])
        except (IMAPClientError, OSError) as e:
            raise MailboxError(f"Cannot flag UID={uid} deleted: {e}") from e

    def close_folder(self) -> None:
        """CLOSE the selected folder; the server expunges \\Deleted messages."""
        try:
            self._require_client().close_folder()
        except (IMAPClientError, OSError) as e:
            raise MailboxError(f"Cannot close folder: {e}") from e
