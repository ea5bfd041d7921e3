"""SessionStore - on-disk cache of the current session"""

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from vipbalance.domain.models import SessionInfo
from vipbalance.shared.exceptions import (
    SessionCacheMiss,
    SessionPersistFailure,
)

if TYPE_CHECKING:
    from loguru import Logger

SESSION_ID_KEY = "Session_id"
CONTRACT_ID_KEY = "Contract_id"

FILE_MODE = 0o600


class SessionStore:
    """Reads and writes the session cache file

    File format: {"Session_id": "...", "Contract_id": "..."}
    """

    def __init__(self, path: str | Path, log: "Logger | None" = None) -> None:
        self._path = Path(path)
        self._log = log or logger.bind(component="session_store")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SessionInfo:
        """Read the cached session

        Returns:
            SessionInfo with both identifiers set

        Raises:
            SessionCacheMiss: If the file is missing, unreadable, malformed
                or holds an empty identifier
        """
        self._log.info(f"Reading session id from {self._path}")
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise SessionCacheMiss(f"Cannot read {self._path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SessionCacheMiss(f"Malformed {self._path}: {e}") from e

        if not isinstance(raw, dict):
            raise SessionCacheMiss(f"Malformed {self._path}: not an object")

        session_id = raw.get(SESSION_ID_KEY)
        contract_id = raw.get(CONTRACT_ID_KEY)
        if not isinstance(session_id, str) or not isinstance(contract_id, str):
            raise SessionCacheMiss(f"Malformed {self._path}: missing keys")

        try:
            return SessionInfo(session_id=session_id, contract_id=contract_id)
        except ValueError as e:
            raise SessionCacheMiss(f"Incomplete {self._path}: {e}") from e

    def save(self, session: SessionInfo) -> None:
        """Truncate and rewrite the cache file

        Raises:
            SessionPersistFailure: If the file cannot be written
        """
        self._log.info(f"Writing session id to {self._path}")
        data = json.dumps(
            {
                SESSION_ID_KEY: session.session_id,
                CONTRACT_ID_KEY: session.contract_id,
            }
        )
        try:
            fd = os.open(
                self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
        except OSError as e:
            raise SessionPersistFailure(
                f"Cannot write session file {self._path}: {e}"
            ) from e
