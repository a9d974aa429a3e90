"""
Torrent records returned by the Transmission daemon.

A Torrent is plain data plus a weak reference to the client that fetched it,
so follow-up calls (e.g. ``torrent.remove()``) go through the same session
without keeping that client alive.
"""

import weakref
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Dict, Optional

from .errors import DecodeError, DetachedTorrentError

if TYPE_CHECKING:
    from .client import TransmissionClient


TORRENT_GET_FIELDS = [
    "id",
    "name",
    "status",
    "hashString",
    "addedDate",
    "leftUntilDone",
    "eta",
    "uploadRatio",
    "rateDownload",
    "rateUpload",
    "downloadDir",
    "isFinished",
    "percentDone",
    "seedRatioMode",
    "error",
    "errorString",
    "totalSize",
]


class TorrentStatus(IntEnum):
    STOPPED = 0
    CHECK_WAIT = 1
    CHECK = 2
    DOWNLOAD_WAIT = 3
    DOWNLOAD = 4
    SEED_WAIT = 5
    SEED = 6


STATUS_NAMES = {
    TorrentStatus.STOPPED: "stopped",
    TorrentStatus.CHECK_WAIT: "check pending",
    TorrentStatus.CHECK: "checking",
    TorrentStatus.DOWNLOAD_WAIT: "download pending",
    TorrentStatus.DOWNLOAD: "downloading",
    TorrentStatus.SEED_WAIT: "seed pending",
    TorrentStatus.SEED: "seeding",
}


@dataclass
class Torrent:
    id: int
    name: str = ""
    status: int = TorrentStatus.STOPPED
    hash_string: str = ""
    added_date: int = 0
    left_until_done: int = 0
    eta: int = 0
    upload_ratio: float = 0.0
    rate_download: int = 0
    rate_upload: int = 0
    download_dir: str = ""
    is_finished: bool = False
    percent_done: float = 0.0
    seed_ratio_mode: int = 0
    error: int = 0
    error_string: str = ""
    total_size: int = 0
    _client_ref: Optional["weakref.ReferenceType[TransmissionClient]"] = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Torrent":
        """
        Build a Torrent from one entry of a torrent-get/torrent-add response.

        Unknown keys are ignored and missing ones keep their defaults, since
        the daemon only returns the fields that were asked for.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Torrent entry is not an object: {data!r}")
        torrent_id = data.get("id")
        if not isinstance(torrent_id, int) or isinstance(torrent_id, bool):
            raise DecodeError(f"Torrent entry has no integer id: {data!r}")

        return cls(
            id=torrent_id,
            name=data.get("name", ""),
            status=data.get("status", TorrentStatus.STOPPED),
            hash_string=data.get("hashString", ""),
            added_date=data.get("addedDate", 0),
            left_until_done=data.get("leftUntilDone", 0),
            eta=data.get("eta", 0),
            upload_ratio=data.get("uploadRatio", 0.0),
            rate_download=data.get("rateDownload", 0),
            rate_upload=data.get("rateUpload", 0),
            download_dir=data.get("downloadDir", ""),
            is_finished=data.get("isFinished", False),
            percent_done=data.get("percentDone", 0.0),
            seed_ratio_mode=data.get("seedRatioMode", 0),
            error=data.get("error", 0),
            error_string=data.get("errorString", ""),
            total_size=data.get("totalSize", 0),
        )

    def bind(self, client: "TransmissionClient") -> "Torrent":
        self._client_ref = weakref.ref(client)
        return self

    @property
    def client(self) -> "TransmissionClient":
        """The client that produced this torrent."""
        client = self._client_ref() if self._client_ref is not None else None
        if client is None:
            raise DetachedTorrentError(f"Torrent {self.id} is not attached to a live client")
        return client

    @property
    def status_name(self) -> str:
        try:
            return STATUS_NAMES[TorrentStatus(self.status)]
        except ValueError:
            return "unknown"

    @property
    def is_active(self) -> bool:
        return self.status in (TorrentStatus.DOWNLOAD, TorrentStatus.SEED)

    @property
    def is_complete(self) -> bool:
        return self.percent_done >= 1.0

    @property
    def progress(self) -> float:
        return self.percent_done

    def remove(self, delete_data: bool = False) -> None:
        """Remove this torrent from the daemon that listed it."""
        self.client.remove_torrents([self], remove_data=delete_data)
