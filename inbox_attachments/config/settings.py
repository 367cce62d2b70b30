# config/settings.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    # CLI defaults
    CONFIG_PATH: str = os.getenv("INBOX_ATTACHMENTS_CONFIG", "./email.conf")
    OUTPUT_DIR: str = os.getenv("INBOX_ATTACHMENTS_OUTPUT", "./out")
    IMAP_FOLDER_INBOX: str = os.getenv("INBOX_ATTACHMENTS_FOLDER", "INBOX")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Used when the JSON config carries no password
    IMAP_PASSWORD: str = os.getenv("IMAP_PASSWORD", "")


@dataclass(frozen=True)
class RunConfig:
    """Per-run values derived once from the command line."""
    config_path: Path
    output_dir: Path
    delete_after_parse: bool = True
    folder: str = "INBOX"
