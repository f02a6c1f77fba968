"""
Credential management for the SMTP notifier.

Loads SMTP credentials from environment variables and .env files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from backup_verifier.config.constants import SMTP_PASSWORD_ENV, SMTP_USERNAME_ENV


@dataclass(frozen=True)
class SMTPCredentials:
    username: str
    password: str


def load_secret(key_name: str, env_file: Optional[Path] = None) -> Optional[str]:
    """
    Load a secret from environment variables or a .env file.

    Search order:
    1. Environment variable (os.environ)
    2. .env file in current directory (if env_file not specified)
    3. .env file at specified path (if env_file provided)

    Args:
        key_name: Name of the environment variable
        env_file: Optional path to .env file. If None, searches in current directory

    Returns:
        The stripped value, or None if unset or blank
    """
    value = os.environ.get(key_name)
    if value and value.strip():
        return value.strip()

    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    value = os.environ.get(key_name)
    if value and value.strip():
        return value.strip()

    return None


def load_smtp_credentials(env_file: Optional[Path] = None) -> Optional[SMTPCredentials]:
    """
    Load SMTP login credentials.

    Returns None when no username is configured, meaning the server is used
    without authentication. A username without a password logs in with an
    empty password.

    Args:
        env_file: Optional path to .env file

    Returns:
        SMTPCredentials or None
    """
    username = load_secret(SMTP_USERNAME_ENV, env_file=env_file)
    if username is None:
        return None
    password = load_secret(SMTP_PASSWORD_ENV, env_file=env_file) or ""
    return SMTPCredentials(username=username, password=password)
