class ConfigurationError(ValueError):
    """The store was given an unusable storage path."""


class StorageUnavailable(RuntimeError):
    """Reading or writing the backing file failed."""


class StoreBusy(StorageUnavailable):
    """Gave up waiting for the store lock."""


class MalformedDocument(ValueError):
    """The backing file does not hold a valid stories document.

    Swallowed by the store unless it was opened in strict mode.
    """
