"""Utility functions shared by the library and the CLI."""

import logging
from typing import Optional

import keyring

LOGGER = logging.getLogger(__name__)

KEYRING_SYSTEM = "materialnotes://backup-password"


def underscore_to_camelcase(word: str, initial_capital: bool = False) -> str:
    """Transform a word from underscore_case to camelCase."""
    words = [x.capitalize() or "_" for x in word.split("_")]
    if not initial_capital:
        words[0] = words[0].lower()

    return "".join(words)


def get_password_from_keyring(account: str) -> Optional[str]:
    """Get the backup password stored in the system keyring for `account`."""
    return keyring.get_password(KEYRING_SYSTEM, account)


def password_exists_in_keyring(account: str) -> bool:
    """Return True if a password is stored in the keyring for `account`."""
    return get_password_from_keyring(account) is not None


def store_password_in_keyring(account: str, password: str) -> None:
    """Store the backup password in the system keyring."""
    LOGGER.debug("notes.keyring.store account=%s", account)
    keyring.set_password(KEYRING_SYSTEM, account, password)


def delete_password_in_keyring(account: str) -> None:
    """Delete the backup password stored in the system keyring."""
    LOGGER.debug("notes.keyring.delete account=%s", account)
    keyring.delete_password(KEYRING_SYSTEM, account)
