"""Exceptions raised by storage backends."""


class StorageError(Exception):
    """Base exception for all storage failures."""
    pass


class DuplicateIdError(StorageError):
    """A short link with this identifier already exists."""
    
    def __init__(self, id: str):
        self.id = id
        super().__init__(f"Short link with id={id} already exists")


class StorageUnavailableError(StorageError):
    """The storage backend could not be reached or is not operational."""
    pass
