# File: inventory/client/storage.py

"""
Local session persistence for the client.

Holds the token and username between runs, the way the browser app keeps
them in localStorage. With ``path=None`` nothing touches the disk.
"""

import json
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_SESSION_PATH = Path.home() / ".dynasty_inventory" / "session.json"


class SessionStore:
    def __init__(self, path: Optional[Path | str] = DEFAULT_SESSION_PATH):
        self.path = Path(path) if path is not None else None
        self.token: Optional[str] = None
        self.username: Optional[str] = None
        self.load()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def load(self) -> None:
        if self.path is None or not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable session file {}: {}", self.path, exc)
            return
        self.token = data.get("token") or None
        self.username = data.get("username") or None

    def save(self, token: str, username: str) -> None:
        self.token = token
        self.username = username
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # owner-only before the token goes in
        self.path.touch(mode=0o600, exist_ok=True)
        self.path.chmod(0o600)
        self.path.write_text(
            json.dumps({"token": token, "username": username}),
            encoding="utf-8",
        )

    def clear(self) -> None:
        self.token = None
        self.username = None
        if self.path is not None and self.path.exists():
            self.path.unlink()
