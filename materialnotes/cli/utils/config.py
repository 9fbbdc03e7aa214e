"""Utility functions for locating and loading the CLI state."""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from keyring.errors import KeyringError
from rich.console import Console

from materialnotes.actions import requires_confirmation
from materialnotes.preferences import Preferences, load_preferences, save_preferences
from materialnotes.store import NoteStore
from materialnotes.utils import (
    get_password_from_keyring,
    password_exists_in_keyring,
    store_password_in_keyring,
)

LOGGER = logging.getLogger(__name__)

console = Console()

CONFIG_DIR_ENV = "MATERIALNOTES_CONFIG_DIR"
KEYRING_ACCOUNT = "backup"


def config_dir() -> Path:
    """Directory holding the notes and preferences files."""
    path = Path(
        os.environ.get(CONFIG_DIR_ENV) or os.path.expanduser("~/.config/materialnotes")
    )
    path.mkdir(parents=True, exist_ok=True)
    return path


def notes_path() -> Path:
    return config_dir() / "notes.json"


def preferences_path() -> Path:
    return config_dir() / "preferences.json"


def get_store() -> NoteStore:
    return NoteStore(notes_path())


def get_preferences() -> Preferences:
    return load_preferences(preferences_path())


def set_preferences(preferences: Preferences) -> None:
    save_preferences(preferences, preferences_path())


def _keyring_password() -> Optional[str]:
    try:
        return get_password_from_keyring(KEYRING_ACCOUNT)
    except KeyringError as exc:
        LOGGER.debug("notes.keyring.unavailable err=%s", exc)
        return None


def get_backup_password(
    provided_password: Optional[str] = None, confirm: bool = False
) -> str:
    """Get the backup password from the provided value, keyring, or prompt."""
    if provided_password:
        return provided_password

    password = _keyring_password()
    if password:
        return password

    return typer.prompt(
        "Backup password", hide_input=True, confirmation_prompt=confirm
    )


def save_backup_password(password: str) -> None:
    """Store the backup password in the keyring unless it is already there."""
    try:
        if password_exists_in_keyring(KEYRING_ACCOUNT):
            return
        store_password_in_keyring(KEYRING_ACCOUNT, password)
    except KeyringError as exc:
        console.print(f"[yellow]Warning:[/yellow] Could not save password: {exc}")
        return
    console.print("Password saved in keyring")


def confirm_action(
    preferences: Preferences, message: str, irreversible: bool, force: bool = False
) -> bool:
    """Ask for a confirmation when the preferences require one."""
    if force or not requires_confirmation(preferences.confirmations, irreversible):
        return True
    return typer.confirm(message)
