from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


def _env_extra_mode(default: str = "ignore") -> str:
    """
    Determine the extra-mode from environment vars.

    MATERIALNOTES_EXTRA: allow|forbid|ignore
    Convenience booleans: "true/1/on" -> forbid (strict), "false/0/off" -> ignore
    """
    raw = (os.getenv("MATERIALNOTES_EXTRA") or default).strip().lower()

    if raw in {"allow", "forbid", "ignore"}:
        return raw

    if raw in {"1", "true", "yes", "on", "strict"}:
        return "forbid"
    if raw in {"0", "false", "no", "off", "lenient"}:
        return "ignore"

    return default


_EXTRA = _env_extra_mode()


class NotesModel(BaseModel):
    """
    Project-wide base model.

    Unknown keys are ignored by default so that files written by newer
    versions still load; switch at runtime by setting an env var before import:
      export MATERIALNOTES_EXTRA=forbid   # or allow/ignore
    """

    model_config = ConfigDict(
        extra=_EXTRA,
        populate_by_name=True,
    )


__all__ = ["NotesModel", "_env_extra_mode"]
