from pathlib import Path


class StorageError(Exception):
    """Base class for failures raised by the tutorial store."""


class TutorialNotFound(StorageError, KeyError):
    def __init__(self, tutorial_id: str) -> None:
        super().__init__(f"Tutorial not found: {tutorial_id}")
        self.tutorial_id = tutorial_id

    def __str__(self) -> str:
        return str(self.args[0])


class StorageIOError(StorageError):
    """A filesystem call failed; keeps the operation and path for diagnosis."""

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        super().__init__(f"{operation} failed for {path}: {cause}")
        self.operation = operation
        self.path = path


class CorruptIndexError(StorageError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unreadable tutorial index {path}: {reason}")
        self.path = path
        self.reason = reason
