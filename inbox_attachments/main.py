# main.py
# Entry point: validate options -> load the email config -> one pass over the inbox
from __future__ import annotations
import logging
import sys
from inbox_attachments.config.email_config import load_email_config
from inbox_attachments.config.settings import Settings
from inbox_attachments.domain.errors import ConfigError, MailboxError, OutputDirectoryError
from inbox_attachments.interface_adapters.cli import build_parser, to_run_config, validate_run_config
from inbox_attachments.interface_adapters.controllers.run_controller import RunController

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_USAGE = 2


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    logging.getLogger().setLevel(args.log_level)
    run_config = to_run_config(args)

    try:
        validate_run_config(run_config)
        imap_config = load_email_config(run_config.config_path, fallback_password=settings.IMAP_PASSWORD)
    except OutputDirectoryError as e:
        logger.error("%s", e)
        return EXIT_USAGE
    except ConfigError as e:
        logger.error("%s", e)
        return EXIT_USAGE

    logger.info("=== Inbox attachments ===")
    logger.info(
        "IMAP host=%s folder=%s output=%s delete=%s",
        imap_config.host, run_config.folder, run_config.output_dir, run_config.delete_after_parse,
    )
    controller = RunController(run_config, imap_config)
    try:
        report = controller.run_once()
    except MailboxError as e:
        logger.error("Error: %s", e)
        return EXIT_RUN_FAILED

    return EXIT_OK if report.ok else EXIT_RUN_FAILED


if __name__ == "__main__":
    sys.exit(main())
