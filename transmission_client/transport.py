"""
HTTP transport for the Transmission RPC interface.

RPCTransport owns the HTTP session and the daemon's session token. It signs
each request (basic auth + X-Transmission-Session-Id), replays the request
exactly once when the daemon answers 409 Conflict with a fresh token, and
decodes the JSON envelope into typed results or typed errors.

Only a 409 triggers the retry. Timeouts, 5xx responses and network failures
are surfaced to the caller untouched.
"""

import threading
from typing import Optional, Type

import requests
from requests.auth import HTTPBasicAuth

from .config import ClientConfig
from .errors import DecodeError, ProtocolError, TransportError
from .logger import logger
from .rpc import RPCRequest, RPCResponse, RPCResult, result_type_for


SESSION_ID_HEADER = "X-Transmission-Session-Id"
MAX_LOGGED_BODY = 512


def _read_body(body) -> bytes:
    """Drain any body requests can carry into a replayable bytes object."""
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if hasattr(body, "read"):
        data = body.read()
        return data.encode("utf-8") if isinstance(data, str) else data
    # Generators and other iterables of chunks
    return b"".join(chunk.encode("utf-8") if isinstance(chunk, str) else chunk for chunk in body)


def _set_body(request: requests.PreparedRequest, body: bytes):
    request.body = body
    request.headers.pop("Transfer-Encoding", None)
    request.headers["Content-Length"] = str(len(body))


def _loggable(body: bytes) -> str:
    text = body.decode("utf-8", errors="replace")
    if len(text) > MAX_LOGGED_BODY:
        return f"{text[:MAX_LOGGED_BODY]}... ({len(body)} bytes)"
    return text


class RPCTransport:
    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.endpoint = self.config.address
        self.session = requests.Session()
        if self.config.skip_check_ssl:
            logger.warning(f"TLS certificate verification disabled for {self.endpoint}")
            self.session.verify = False
        self._session_id: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def session_id(self) -> Optional[str]:
        with self._lock:
            return self._session_id

    def _store_session_id(self, session_id: Optional[str]):
        with self._lock:
            self._session_id = session_id

    def do(self, request: requests.PreparedRequest, allow_retry: bool) -> requests.Response:
        """
        Send a prepared request, handling auth and the session-id handshake.

        The body is read into memory first so it can be sent again verbatim
        if the daemon rejects the session token. The response is returned as
        received; its payload is not inspected here.

        Args:
            request: Prepared request whose body is the serialized envelope
            allow_retry: Whether a 409 may trigger a single resend

        Returns:
            The final HTTP response

        Raises:
            TransportError: If the body can't be read or the send fails
        """
        if self.config.has_credentials:
            HTTPBasicAuth(self.config.username, self.config.password)(request)

        session_id = self.session_id
        if session_id:
            request.headers[SESSION_ID_HEADER] = session_id

        try:
            body = _read_body(request.body)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to read request body: {e}")
            raise TransportError(f"Failed to read request body: {e}") from e
        _set_body(request, body)

        logger.debug(f"Transmission RPC request to {self.endpoint}: {_loggable(body)}")

        try:
            response = self.session.send(request, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.error(f"Failed to reach Transmission at {self.endpoint}: {e}")
            raise TransportError(f"Failed to reach Transmission at {self.endpoint}: {e}") from e

        if response.status_code == requests.codes.conflict and allow_retry:
            new_session_id = response.headers.get(SESSION_ID_HEADER)
            logger.info(f"Transmission session id refreshed for {self.endpoint}")
            self._store_session_id(new_session_id)
            request.headers.pop(SESSION_ID_HEADER, None)
            _set_body(request, body)
            return self.do(request, False)

        return response

    def post(self, envelope: RPCRequest) -> requests.Response:
        """Serialize an envelope and POST it to the endpoint, retry enabled."""
        try:
            data = envelope.to_json()
            request = self.session.prepare_request(requests.Request(
                "POST",
                self.endpoint,
                data=data,
                headers={"Content-Type": "application/json"},
            ))
        except (TypeError, ValueError, requests.RequestException) as e:
            logger.error(f"Failed to build {envelope.method} request: {e}")
            raise TransportError(f"Failed to build {envelope.method} request: {e}") from e

        return self.do(request, True)

    def request(self, envelope: RPCRequest,
                result_type: Optional[Type[RPCResult]] = None) -> RPCResponse:
        """
        Perform one RPC call and decode the daemon's envelope.

        Args:
            envelope: Outgoing method + arguments
            result_type: Shape to decode ``arguments`` into; defaults to the
                type registered for ``envelope.method``

        Returns:
            RPCResponse whose ``arguments`` is an instance of ``result_type``

        Raises:
            TransportError: Send or body read failed
            DecodeError: Body is not a valid envelope of the expected shape
            ProtocolError: Daemon returned a result other than "success"
        """
        if result_type is None:
            result_type = result_type_for(envelope.method)

        response = self.post(envelope)
        try:
            body = response.content
        except requests.RequestException as e:
            logger.error(f"Failed to read {envelope.method} response: {e}")
            raise TransportError(f"Failed to read {envelope.method} response: {e}") from e

        try:
            rpc_response = RPCResponse.decode(body, result_type, status_code=response.status_code)
        except DecodeError as e:
            logger.error(f"Failed to decode {envelope.method} response: {e}")
            raise

        if not rpc_response.ok:
            logger.warning(f"Transmission {envelope.method} failed: {rpc_response.result}")
            raise ProtocolError(rpc_response.result)

        return rpc_response

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
