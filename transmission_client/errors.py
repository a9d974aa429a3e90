"""
Exceptions raised by the Transmission RPC client.

- TransmissionError: Base exception for every client failure
- TransportError: The HTTP exchange itself failed (request build, send, body read)
- DecodeError: The response body is not a valid RPC envelope
- ProtocolError: The daemon answered with a result other than "success"
- DetachedTorrentError: A torrent outlived the client that fetched it
"""

from typing import Optional


class TransmissionError(Exception):
    """Base exception for Transmission client errors."""
    pass


class TransportError(TransmissionError):
    """Raised when a request cannot be built, sent, or its body read."""
    pass


class DecodeError(TransmissionError):
    """Raised when a response is not valid JSON or not the expected shape."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(TransmissionError):
    """
    Raised when the daemon reports a failure in the envelope's result field.

    The daemon's message is the only diagnostic available, so it is kept
    verbatim both as ``result`` and as the exception message.
    """

    def __init__(self, result: str):
        super().__init__(result)
        self.result = result


class DetachedTorrentError(TransmissionError):
    """Raised when a torrent's client has been garbage collected or was never set."""
    pass
