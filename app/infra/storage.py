from pathlib import Path

from app.infra.errors import StorageIOError


class ContentBlobStore:
    """One content file per tutorial, addressed as ``<root>/<id><ext>``."""

    def __init__(self, root: Path, ext: str = ".html") -> None:
        self._root = root
        self._ext = ext

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, tutorial_id: str) -> Path:
        if tutorial_id in ("", ".", "..") or "/" in tutorial_id or "\\" in tutorial_id:
            raise ValueError(f"Invalid tutorial id: {tutorial_id!r}")
        return self._root / f"{tutorial_id}{self._ext}"

    def _ensure_root(self) -> None:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("mkdir", self._root, e) from e

    def write(self, tutorial_id: str, data: bytes) -> int:
        path = self.path_for(tutorial_id)
        self._ensure_root()
        try:
            path.write_bytes(data)
            return path.stat().st_size
        except OSError as e:
            raise StorageIOError("write", path, e) from e

    def read(self, tutorial_id: str) -> bytes | None:
        path = self.path_for(tutorial_id)
        self._ensure_root()
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageIOError("read", path, e) from e

    def delete(self, tutorial_id: str) -> bool:
        path = self.path_for(tutorial_id)
        self._ensure_root()
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageIOError("delete", path, e) from e
        return True
