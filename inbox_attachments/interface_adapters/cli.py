# interface_adapters/cli.py
from __future__ import annotations
import argparse
from pathlib import Path

from inbox_attachments.config.settings import Settings, RunConfig
from inbox_attachments.domain.errors import ConfigError
from inbox_attachments.infrastructure.filesystem.storage import OutputDirectory

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="inbox-attachments",
        description="Download the attachments of every mail in an IMAP folder into per-subject folders.",
    )
    p.add_argument("-c", "--config", default=settings.CONFIG_PATH,
                   help="Path to the email config file (JSON)")
    p.add_argument("-o", "--output", default=settings.OUTPUT_DIR,
                   help="Path to the output directory")
    p.add_argument("--no-delete", dest="delete", action="store_false",
                   help="Do not delete mails after saving their attachments")
    p.add_argument("--folder", default=settings.IMAP_FOLDER_INBOX,
                   help="Mailbox folder to scan")
    p.add_argument("--log-level", default=settings.LOG_LEVEL, type=str.upper, choices=LOG_LEVELS,
                   help="Logging level")
    return p

def to_run_config(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        config_path=Path(args.config),
        output_dir=Path(args.output),
        delete_after_parse=args.delete,
        folder=args.folder,
    )

def validate_run_config(run_config: RunConfig) -> None:
    """
    Creates the output root if needed (OutputDirectoryError when impossible)
    and checks that the config file exists (ConfigError).
    """
    OutputDirectory(run_config.output_dir).ensure_root()
    if not run_config.config_path.is_file():
        raise ConfigError(f"The email config file does not exist: {run_config.config_path}")
