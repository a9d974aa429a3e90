"""
Request/response envelopes and the typed argument/result shapes of each
supported RPC method.

Every supported method is a pair of classes registered in RPC_METHODS: an
argument dataclass that knows its method name and wire form, and a result
class that knows how to read the daemon's ``arguments`` object back.
"""

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar, Union

from .errors import DecodeError
from .torrent import Torrent


SUCCESS = "success"

ResultT = TypeVar("ResultT", bound="RPCResult")


class RPCResult:
    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]):
        raise NotImplementedError


@dataclass
class EmptyResult(RPCResult):
    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "EmptyResult":
        return cls()


@dataclass
class TorrentGetResult(RPCResult):
    torrents: List[Torrent] = field(default_factory=list)

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "TorrentGetResult":
        torrents = arguments.get("torrents", [])
        if not isinstance(torrents, list):
            raise DecodeError(f"'torrents' is not a list: {torrents!r}")
        return cls(torrents=[Torrent.from_dict(item) for item in torrents])


@dataclass
class TorrentAddResult(RPCResult):
    torrent: Torrent
    duplicate: bool = False

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "TorrentAddResult":
        # Newer daemons answer a duplicate add with success and this key
        if "torrent-added" in arguments:
            return cls(torrent=Torrent.from_dict(arguments["torrent-added"]))
        if "torrent-duplicate" in arguments:
            return cls(torrent=Torrent.from_dict(arguments["torrent-duplicate"]), duplicate=True)
        raise DecodeError("Response has no 'torrent-added' entry")


@dataclass
class TorrentGetArguments:
    METHOD: ClassVar[str] = "torrent-get"

    fields: List[str] = field(default_factory=list)
    ids: Optional[List[int]] = None

    def to_arguments(self) -> Dict[str, Any]:
        arguments: Dict[str, Any] = {}
        if self.fields:
            arguments["fields"] = list(self.fields)
        if self.ids:
            arguments["ids"] = list(self.ids)
        return arguments


@dataclass
class TorrentAddArguments:
    """
    Arguments for torrent-add.

    ``filename`` is a URL or a path on the daemon's host, ``metainfo`` is the
    base64-encoded .torrent content. Only one should be set; the daemon
    decides what happens when both are.
    """
    METHOD: ClassVar[str] = "torrent-add"

    filename: str = ""
    metainfo: str = ""

    def to_arguments(self) -> Dict[str, Any]:
        arguments: Dict[str, Any] = {}
        if self.filename:
            arguments["filename"] = self.filename
        if self.metainfo:
            arguments["metainfo"] = self.metainfo
        return arguments


@dataclass
class TorrentRemoveArguments:
    METHOD: ClassVar[str] = "torrent-remove"

    ids: List[int] = field(default_factory=list)
    delete_local_data: bool = False

    def to_arguments(self) -> Dict[str, Any]:
        # The daemon takes ids as numeric strings here
        arguments: Dict[str, Any] = {"ids": [str(torrent_id) for torrent_id in self.ids]}
        if self.delete_local_data:
            arguments["delete-local-data"] = True
        return arguments


RPCArguments = Union[TorrentGetArguments, TorrentAddArguments, TorrentRemoveArguments]

RPC_METHODS: Dict[str, tuple] = {
    TorrentGetArguments.METHOD: (TorrentGetArguments, TorrentGetResult),
    TorrentAddArguments.METHOD: (TorrentAddArguments, TorrentAddResult),
    TorrentRemoveArguments.METHOD: (TorrentRemoveArguments, EmptyResult),
}


def result_type_for(method: str) -> Type[RPCResult]:
    try:
        return RPC_METHODS[method][1]
    except KeyError:
        raise ValueError(f"Unsupported RPC method: {method}")


@dataclass
class RPCRequest:
    method: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, arguments: RPCArguments) -> "RPCRequest":
        if arguments.METHOD not in RPC_METHODS:
            raise ValueError(f"Unsupported RPC method: {arguments.METHOD}")
        return cls(method=arguments.METHOD, arguments=arguments.to_arguments())

    def to_json(self) -> bytes:
        return json.dumps({"method": self.method, "arguments": self.arguments}).encode("utf-8")


@dataclass
class RPCResponse:
    result: str
    arguments: Any = None

    @property
    def ok(self) -> bool:
        return self.result == SUCCESS

    @classmethod
    def decode(cls, body: bytes, result_type: Type[ResultT],
               status_code: Optional[int] = None) -> "RPCResponse":
        """
        Parse a response body into an envelope with typed arguments.

        Raises:
            DecodeError: body is not JSON, not an object, lacks a string
                ``result``, or its arguments don't fit ``result_type``
        """
        try:
            data = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Invalid JSON in response (HTTP {status_code}): {e}", status_code)

        if not isinstance(data, dict) or not isinstance(data.get("result"), str):
            raise DecodeError(f"Response is not an RPC envelope (HTTP {status_code})", status_code)

        result = data["result"]
        arguments = data.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise DecodeError(f"Response arguments are not an object (HTTP {status_code})", status_code)

        # Failed calls carry no usable payload
        if result != SUCCESS:
            return cls(result=result, arguments=None)

        try:
            typed = result_type.from_arguments(arguments)
        except DecodeError as e:
            e.status_code = status_code
            raise
        return cls(result=result, arguments=typed)
