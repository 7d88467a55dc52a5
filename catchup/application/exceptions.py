class RemoteStoreError(RuntimeError):
    """Raised when the bookings API fails (timeouts, network errors, non-2xx responses)."""
    pass


class RemoteContractError(RemoteStoreError):
    """Raised when the bookings API answers with a payload of the wrong shape."""
    pass


class LocalStorageError(RuntimeError):
    """Raised when the local storage slot cannot be read or written."""
    pass


class BookingSaveError(RuntimeError):
    """Raised when a booking could be saved neither remotely nor locally."""
    pass
