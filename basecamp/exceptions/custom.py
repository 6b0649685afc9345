class StoreError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(StoreError):
    def __init__(self, kind: str, key: object):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class InvalidInputError(StoreError):
    pass


class InvalidFileTypeError(InvalidInputError):
    def __init__(self, file_name: str, allowed: list[str]):
        self.file_name = file_name
        self.allowed = allowed
        super().__init__(
            f"File type not allowed: {file_name} (allowed: {', '.join(allowed)})"
        )


class FileTooLargeError(InvalidInputError):
    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"File size is too large: {size} bytes (max {max_size} bytes)"
        )


class ConflictError(StoreError):
    pass


class InvalidTransitionError(ConflictError):
    def __init__(self, booking_id: str, current: str, requested: str):
        self.booking_id = booking_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Booking {booking_id} cannot move from '{current}' to '{requested}'"
        )


class StorageIOError(StoreError):
    def __init__(self, message: str, path: object | None = None):
        self.path = path
        super().__init__(message)
