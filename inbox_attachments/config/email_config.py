# config/email_config.py
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from inbox_attachments.domain.errors import ConfigError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ImapConfig:
    host: str
    user: str
    password: str
    port: int = 993
    tls: bool = True
    verify_certificate: bool = True
    timeout: float | None = None  # seconds

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, fallback_password: str = "") -> "ImapConfig":
        """
        Accepts the connection object used by node-style IMAP configs:
            {"host", "port", "user", "password", "tls", "authTimeout",
             "tlsOptions": {"rejectUnauthorized": false}}
        `username` and `ssl` are accepted as aliases of `user` and `tls`.
        """
        host = str(raw.get("host") or "").strip()
        user = str(raw.get("user") or raw.get("username") or "").strip()
        if not host:
            raise ConfigError("'host' is missing from the email config")
        if not user:
            raise ConfigError("'user' is missing from the email config")

        tls = raw.get("tls", raw.get("ssl", True))
        if not isinstance(tls, bool):
            raise ConfigError(f"'tls' must be true or false, got {tls!r}")

        port_raw = raw.get("port") or (993 if tls else 143)
        try:
            port = int(port_raw)
        except (TypeError, ValueError):
            raise ConfigError(f"'port' is not a number: {port_raw!r}") from None

        timeout: float | None = None
        if raw.get("authTimeout") is not None:
            try:
                timeout = float(raw["authTimeout"]) / 1000.0
            except (TypeError, ValueError):
                raise ConfigError(f"'authTimeout' is not a number: {raw['authTimeout']!r}") from None

        tls_options = raw.get("tlsOptions") or {}
        verify = bool(tls_options.get("rejectUnauthorized", True))

        return cls(
            host=host,
            user=user,
            password=str(raw.get("password") or fallback_password),
            port=port,
            tls=tls,
            verify_certificate=verify,
            timeout=timeout,
        )


def load_email_config(path: Path, *, fallback_password: str = "") -> ImapConfig:
    if not path.is_file():
        raise ConfigError(f"The email config file does not exist: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"The email config file is not valid JSON ({path}): {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read the email config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"The email config file must hold a JSON object: {path}")
    # {"imap": {...}} wraps the connection object in some configs
    if isinstance(raw.get("imap"), dict):
        raw = raw["imap"]

    config = ImapConfig.from_dict(raw, fallback_password=fallback_password)
    logger.debug("Loaded email config host=%s port=%s tls=%s", config.host, config.port, config.tls)
    return config
