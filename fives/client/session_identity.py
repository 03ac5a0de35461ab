"""
session_identity.py — Client-local anonymous session identity.

The session id is generated once per client, kept in durable local storage
under SESSION_STORAGE_KEY, and sent as the X-Session-Id header on every API
call. Anyone holding the id can read and write that session's data.

Format: session_<epoch milliseconds>_<random base-36 suffix>
Collision resistant in practice; not a cryptographic identifier.
"""
import json
import logging
import random
import string
import time
from pathlib import Path
from typing import Optional, Protocol, Union

from fives.config import settings

logger = logging.getLogger(__name__)

SESSION_STORAGE_KEY = "5s_session_id"

_BASE36_DIGITS = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 13


class KeyStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyStorage:
    """Non-durable storage for tests and throwaway clients."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileKeyStorage:
    """
    Durable storage: a small JSON object in a file.
    A missing or unreadable file, or one whose JSON is not an object, reads
    as empty; the next set() overwrites it.
    """

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path or settings.session_store_path).expanduser()

    def _read(self) -> dict[str, str]:
        try:
            values = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Unreadable session store %s: %s", self.path, exc)
            return {}
        if not isinstance(values, dict):
            logger.warning(
                "Session store %s holds %s, not an object", self.path, type(values).__name__
            )
            return {}
        return values

    def _write(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self._write(values)

    def remove(self, key: str) -> None:
        values = self._read()
        if values.pop(key, None) is not None:
            self._write(values)


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_session_id() -> str:
    millis = int(time.time() * 1000)
    suffix = _to_base36(random.getrandbits(64))[:_SUFFIX_LENGTH]
    return f"session_{millis}_{suffix}"


class SessionIdentityProvider:
    """Reads, lazily creates and clears the client's session id."""

    def __init__(self, storage: Optional[KeyStorage] = None) -> None:
        self.storage = storage if storage is not None else FileKeyStorage()

    def get_session_id(self) -> str:
        session_id = self.storage.get(SESSION_STORAGE_KEY)
        if not session_id:
            session_id = generate_session_id()
            self.storage.set(SESSION_STORAGE_KEY, session_id)
            logger.info("Generated new session_id=%s", session_id)
        return session_id

    def clear_session(self) -> None:
        """Forget the local id. Rows already stored under it stay on the server."""
        self.storage.remove(SESSION_STORAGE_KEY)
        logger.info("Cleared local session id")
