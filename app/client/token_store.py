"""
Bearer token storage.

The token lives in a single process-wide slot that is loaded from a
local file on first use and written back whenever it changes.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = Path.home() / ".ridersos" / "token"


class TokenStore:
    """File-backed holder for the current bearer token."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or os.environ.get("RIDERSOS_TOKEN_FILE", DEFAULT_TOKEN_PATH))
        self._token: Optional[str] = None
        self._loaded = False

    def get(self) -> Optional[str]:
        if not self._loaded:
            self._token = self._read()
            self._loaded = True
        return self._token

    def set(self, token: str) -> None:
        self._token = token
        self._loaded = True
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        self._token = None
        self._loaded = True
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def _read(self) -> Optional[str]:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError:
            logger.warning("Could not read token file %s", self.path, exc_info=True)
            return None
        return token or None


# Process-wide slot shared by every client that is not given its own store
token_store = TokenStore()
