"""Reading and writing the daemon state file under an exclusive file lock."""

from __future__ import annotations

import copy
import json
import os
import threading
from pathlib import Path
from typing import Any

import portalocker

from .errors import OpenFileError, StateAlreadyLockedError

__all__ = ["JsonLockedState", "read", "patch_state_if_old"]

_held_paths: set[str] = set()
_held_paths_guard = threading.Lock()


class JsonLockedState:
    """A JSON state file held under an exclusive, non-blocking lock.

    The file is created when missing and is written back when the state is
    closed, either explicitly or by leaving a ``with`` block.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = os.fspath(path)
        self._key = str(Path(self._path).resolve())
        self._closed = True

        with _held_paths_guard:
            if self._key in _held_paths:
                raise StateAlreadyLockedError(self._path)
            _held_paths.add(self._key)

        try:
            fd = os.open(self._path, os.O_RDWR | os.O_CREAT, 0o644)
            self._file = os.fdopen(fd, "r+", encoding="utf-8")
        except OSError as exc:
            self._release_key()
            raise OpenFileError(self._path, str(exc)) from exc

        try:
            portalocker.lock(self._file, portalocker.LOCK_EX | portalocker.LOCK_NB)
        except portalocker.exceptions.LockException as exc:
            self._file.close()
            self._release_key()
            raise StateAlreadyLockedError(self._path) from exc

        try:
            if os.fstat(self._file.fileno()).st_size == 0:
                self._json: dict[str, Any] = {}
            else:
                self._file.seek(0)
                self._json = patch_state_if_old(json.load(self._file))
        except Exception:
            self._unlock_and_close()
            raise

        self._closed = False

    def _release_key(self) -> None:
        with _held_paths_guard:
            _held_paths.discard(self._key)

    def _unlock_and_close(self) -> None:
        try:
            portalocker.unlock(self._file)
        finally:
            self._file.close()
            self._release_key()

    def prepare(self, chain_id: str, deploy_id: str) -> None:
        """Make sure the chain has an entry with the deployment and a code id map."""
        if chain_id not in self._json:
            self._json[chain_id] = {deploy_id: {}, "code_ids": {}}

    def state(self) -> dict[str, Any]:
        """A copy of the whole state."""
        return copy.deepcopy(self._json)

    def get(self, chain_id: str) -> Any:
        """The live entry of a chain, to read or change in place; None when absent."""
        return self._json.get(chain_id)

    def force_write(self) -> None:
        """Replace the file contents with the current state."""
        if self._closed:
            raise ValueError(f"state file {self._path} is already closed")
        self._file.seek(0)
        self._file.truncate(0)
        json.dump(self._json, self._file, indent=2, ensure_ascii=False)
        self._file.flush()
        os.fsync(self._file.fileno())

    def close(self) -> None:
        """Write the state, release the lock and close the file."""
        if self._closed:
            return
        try:
            self.force_write()
        finally:
            self._closed = True
            self._unlock_and_close()

    def path(self) -> str:
        """Path of the state file as given."""
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> JsonLockedState:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            self.close()

    def __repr__(self) -> str:
        return f"JsonLockedState(path={self._path!r}, closed={self._closed})"


def read(filename: str | os.PathLike[str]) -> Any:
    """Read a JSON file without taking its lock."""
    name = os.fspath(filename)
    try:
        handle = open(name, encoding="utf-8")
    except OSError as exc:
        raise OpenFileError(name, str(exc)) from exc
    with handle:
        return json.load(handle)


def _expect_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError("Unexpected daemon state format")
    return value


def patch_state_if_old(maybe_old: Any) -> dict[str, Any]:
    """Flatten the old ``{chain_name: {chain_id: ...}}`` layout into ``{chain_id: ...}``.

    A state whose first chain entry already holds ``code_ids`` is returned unchanged.
    """
    state = _expect_object(maybe_old)
    if not state:
        return state
    first_chain = _expect_object(next(iter(state.values())))
    if "code_ids" in first_chain:
        return state

    patched: dict[str, Any] = {}
    for chain_value in state.values():
        patched.update(_expect_object(chain_value))
    return patched