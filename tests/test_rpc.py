import json

import pytest

from transmission_client.errors import DecodeError
from transmission_client.rpc import (
    RPC_METHODS,
    EmptyResult,
    RPCRequest,
    RPCResponse,
    TorrentAddArguments,
    TorrentAddResult,
    TorrentGetArguments,
    TorrentGetResult,
    TorrentRemoveArguments,
    result_type_for,
)


class TestRequestEnvelope:
    def test_wire_form(self):
        envelope = RPCRequest.build(TorrentGetArguments(fields=["id", "name"], ids=[1, 2]))
        assert json.loads(envelope.to_json()) == {
            "method": "torrent-get",
            "arguments": {"fields": ["id", "name"], "ids": [1, 2]},
        }

    def test_empty_members_are_omitted(self):
        assert TorrentGetArguments().to_arguments() == {}
        assert TorrentAddArguments().to_arguments() == {}
        assert TorrentAddArguments(filename="a", metainfo="b").to_arguments() == {
            "filename": "a", "metainfo": "b",
        }

    def test_remove_ids_are_strings(self):
        arguments = TorrentRemoveArguments(ids=[10, 20], delete_local_data=True).to_arguments()
        assert arguments == {"ids": ["10", "20"], "delete-local-data": True}

    def test_fresh_envelope_per_call(self):
        arguments = TorrentAddArguments(filename="a")
        first = RPCRequest.build(arguments)
        second = RPCRequest.build(arguments)
        first.arguments["filename"] = "changed"
        assert second.arguments == {"filename": "a"}

    def test_registry(self):
        assert set(RPC_METHODS) == {"torrent-get", "torrent-add", "torrent-remove"}
        assert result_type_for("torrent-remove") is EmptyResult
        with pytest.raises(ValueError):
            result_type_for("session-get")


class TestResponseEnvelope:
    def test_round_trip(self):
        envelope = RPCRequest.build(TorrentGetArguments(fields=["id", "name", "status"]))
        sent = json.loads(envelope.to_json())
        reply = {
            "result": "success",
            "arguments": {"torrents": [{"id": 1, "name": "debian", "status": 0}]},
        }

        response = RPCResponse.decode(json.dumps(reply).encode(), result_type_for(sent["method"]))

        assert sent["arguments"]["fields"] == ["id", "name", "status"]
        assert response.ok
        assert isinstance(response.arguments, TorrentGetResult)
        assert response.arguments.torrents[0].name == "debian"

    def test_missing_arguments_defaults_to_empty(self):
        response = RPCResponse.decode(b'{"result": "success"}', TorrentGetResult)
        assert response.arguments.torrents == []

    def test_failure_keeps_result_verbatim(self):
        response = RPCResponse.decode(b'{"result": "duplicate torrent", "arguments": {}}', TorrentAddResult)
        assert not response.ok
        assert response.result == "duplicate torrent"
        assert response.arguments is None

    @pytest.mark.parametrize("body", [
        b"",
        b"<html>",
        b"[]",
        b'{"arguments": {}}',
        b'{"result": 1}',
        b'{"result": "success", "arguments": []}',
        b'{"result": "success", "arguments": {"torrents": {}}}',
        b'{"result": "success", "arguments": {"torrents": [{"name": "no id"}]}}',
    ])
    def test_bad_bodies(self, body):
        with pytest.raises(DecodeError):
            RPCResponse.decode(body, TorrentGetResult, status_code=200)

    def test_add_without_torrent_is_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            RPCResponse.decode(b'{"result": "success", "arguments": {}}', TorrentAddResult, status_code=200)
        assert exc_info.value.status_code == 200
