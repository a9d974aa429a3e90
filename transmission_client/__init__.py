"""
Transmission Client - Talk to a Transmission daemon over JSON-RPC.

Lists, adds and removes torrents while handling the daemon's
X-Transmission-Session-Id handshake transparently.
"""

from .client import TransmissionClient, new
from .config import Config, ClientConfig, DEFAULT_ADDRESS
from .errors import (
    TransmissionError,
    TransportError,
    DecodeError,
    ProtocolError,
    DetachedTorrentError,
)
from .torrent import Torrent, TorrentStatus

__version__ = "0.1.0"
__all__ = [
    "TransmissionClient",
    "new",
    "Config",
    "ClientConfig",
    "DEFAULT_ADDRESS",
    "TransmissionError",
    "TransportError",
    "DecodeError",
    "ProtocolError",
    "DetachedTorrentError",
    "Torrent",
    "TorrentStatus",
]
