"""
Custom exception types for the Fisnar driver and drawing pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class ProtocolError(RuntimeError):
    """Device replied with something the protocol does not allow.

    ``reply`` is the offending line. ``data`` holds the data line of a query
    command whose acknowledgement was wrong, so callers may still inspect it.
    """

    def __init__(self, message: str, reply: str | None = None, data: str | None = None):
        self.original_message = message
        self.reply = reply
        self.data = data
        super().__init__(f"Protocol Error: {message}")

    def __str__(self):
        return f"Protocol Error: {self.original_message}"


class ReplyTimeoutError(TimeoutError):
    """No reply byte arrived within the serial read timeout."""

    def __init__(self, partial: str = "", timeout: float | None = None):
        self.partial = partial
        self.timeout = timeout
        detail = f" after {timeout:g}s" if timeout is not None else ""
        if partial:
            detail += f" (partial line: '{partial}')"
        super().__init__(f"Timed out waiting for device reply{detail}")


class DrawingError(OSError):
    """Drawing file could not be opened or is not a readable DXF document."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"Cannot read drawing '{filename}': {reason}")
        self.filename = filename
        self.reason = reason

    def __str__(self):
        return f"Cannot read drawing '{self.filename}': {self.reason}"
