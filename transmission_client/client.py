"""
Python client for the Transmission daemon's RPC interface.

Lists, adds and removes torrents. Session-id negotiation, basic auth and
envelope decoding are handled by RPCTransport; every method here just builds
the typed arguments, makes one call and reshapes the result.

Usage:
    from transmission_client import TransmissionClient, ClientConfig

    client = TransmissionClient(ClientConfig(username="admin", password="secret"))
    for torrent in client.get_torrents():
        print(torrent.name, torrent.status_name)

    torrent = client.add_torrent(filename="https://example.com/file.torrent")
    torrent.remove(delete_data=True)
"""

import base64
from typing import Iterable, List, Optional

from .config import ClientConfig
from .errors import TransmissionError
from .logger import logger
from .rpc import (
    RPCRequest,
    TorrentAddArguments,
    TorrentAddResult,
    TorrentGetArguments,
    TorrentGetResult,
    TorrentRemoveArguments,
    EmptyResult,
)
from .torrent import TORRENT_GET_FIELDS, Torrent
from .transport import RPCTransport


class TransmissionClient:
    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.transport = RPCTransport(self.config)

    @property
    def endpoint(self) -> str:
        return self.transport.endpoint

    @property
    def session_id(self) -> Optional[str]:
        return self.transport.session_id

    def check_connection(self) -> bool:
        """Test if the connection to Transmission is working."""
        try:
            self.transport.request(
                RPCRequest.build(TorrentGetArguments(fields=["id"])), TorrentGetResult
            )
            return True
        except TransmissionError as e:
            logger.error(f"Failed to connect to Transmission at {self.endpoint}: {e}")
            return False

    def get_torrents(self) -> List[Torrent]:
        """
        List every torrent known to the daemon.

        Returns:
            Torrents carrying the fields in TORRENT_GET_FIELDS, each bound
            to this client
        """
        envelope = RPCRequest.build(TorrentGetArguments(fields=TORRENT_GET_FIELDS))
        result: TorrentGetResult = self.transport.request(envelope, TorrentGetResult).arguments
        return [torrent.bind(self) for torrent in result.torrents]

    def add_torrent(self, filename: str = "", metadata: str = "") -> Torrent:
        """
        Add a torrent from a filename/URL or from base64-encoded metadata.

        Args:
            filename: URL, magnet link or path on the daemon's host
            metadata: Base64-encoded content of a .torrent file

        Returns:
            The added torrent, bound to this client
        """
        envelope = RPCRequest.build(TorrentAddArguments(filename=filename, metainfo=metadata))
        result: TorrentAddResult = self.transport.request(envelope, TorrentAddResult).arguments
        if result.duplicate:
            logger.info(f"Torrent already present: {result.torrent.name}")
        else:
            logger.info(f"Added torrent {result.torrent.id}: {result.torrent.name}")
        return result.torrent.bind(self)

    def add_torrent_file(self, path: str) -> Torrent:
        """Add a local .torrent file by sending its content as metadata."""
        try:
            with open(path, "rb") as f:
                torrent_data = f.read()
        except OSError as e:
            logger.error(f"Failed to read torrent file {path}: {e}")
            raise TransmissionError(f"Failed to read torrent file {path}: {e}") from e

        return self.add_torrent(metadata=base64.b64encode(torrent_data).decode("ascii"))

    def remove_torrents(self, torrents: Iterable[Torrent], remove_data: bool = False) -> None:
        """
        Remove torrents from the daemon.

        Args:
            torrents: Torrents to remove
            remove_data: Also delete the downloaded data
        """
        ids = [torrent.id for torrent in torrents]
        envelope = RPCRequest.build(TorrentRemoveArguments(ids=ids, delete_local_data=remove_data))
        self.transport.request(envelope, EmptyResult)
        logger.info(f"Removed torrents {ids} (delete data: {remove_data})")

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def new(config: Optional[ClientConfig] = None) -> TransmissionClient:
    """Create a client; an empty config address falls back to the local daemon."""
    return TransmissionClient(config)
