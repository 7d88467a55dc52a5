from abc import ABC, abstractmethod


class LocalStoragePort(ABC):
    """Named string slots on the local device, in the manner of browser localStorage."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the slot's value, or None if it was never written.

        Raises LocalStorageError if the slot exists but cannot be read.
        """
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`. Raises LocalStorageError if it cannot be written."""
        raise NotImplementedError

    @abstractmethod
    def remove_item(self, key: str) -> None:
        raise NotImplementedError
