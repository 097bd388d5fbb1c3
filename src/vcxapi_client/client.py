# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""VcxApiClient — async HTTP client for the VCX API REST service.

Every remote capability of the service (connections, challenges, schemas,
credential definitions, credentials, proofs and messages) is exposed as a
coroutine. Each one builds a URL under ``{base_url}/api``, optionally shapes
a payload from one of the request types in :mod:`types`, and sends it
through a :class:`~executor.RequestExecutor`.

Single-entity lookups (``get_connection``, ``get_schema_by_id``, ...) return
``None`` when the server answers 404. Every other failure, and every 404 on
a list or a mutation, raises :class:`~types.VcxApiError`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from .config import DEFAULT_TIMEOUT, ClientConfig
from .executor import RequestExecutor, none_if_not_found
from .logging_config import DiagnosticSink
from .query import encode_bracket_query, encode_segment, encode_selection
from .types import (
    ChallengeSolution,
    ConnectionLookupError,
    CredentialDefinitionRequest,
    CredentialOffer,
    MessageRequest,
    MessageUpdate,
    ProofRequest,
    SchemaCreateRequest,
    SchemaLoadRequest,
    SignedData,
)


class VcxApiClient:
    """Async client for the VCX API REST service.

    All methods that call the remote server are coroutines and must be
    awaited. No call is retried.

    Parameters
    ----------
    base_url:
        Root URL of the server, e.g. ``"https://vcx.example.com"``. A
        trailing slash is stripped automatically. Required.
    auth:
        Optional ``(username, password)`` pair, sent as HTTP Basic auth on
        every request.
    logger:
        Optional diagnostic sink with ``debug``/``warning``/``error``
        methods, typically a :class:`logging.Logger`.
    timeout:
        Transport timeout in seconds for internally created HTTP clients.
        Defaults to 10.
    http_client:
        Optional pre-configured :class:`httpx.AsyncClient`. Useful for
        injecting test transports or custom SSL contexts.

    Examples
    --------
    >>> client = VcxApiClient("https://vcx.example.com", auth=("admin", "secret"))
    >>> await client.create_connection("alice")
    >>> invite = await client.get_connection_invite("alice")
    >>> await client.get_connection("bob")  # None if unknown
    """

    def __init__(
        self,
        base_url: str,
        auth: tuple[str, str] | None = None,
        logger: DiagnosticSink | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("VcxApiClient: base_url is not defined")
        self._base_url = base_url.rstrip("/")
        self._api = f"{self._base_url}/api"
        self._owned_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._executor = RequestExecutor(self._http, auth=auth, logger=logger)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        logger: DiagnosticSink | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "VcxApiClient":
        return cls(
            config.base_url,
            auth=config.auth,
            logger=logger,
            timeout=config.timeout,
            http_client=http_client,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Context manager support
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "VcxApiClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if it was created internally."""
        if self._owned_client:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    async def create_connection(self, connection_id: str) -> Any:
        return await self._executor.create(self._connection_url(connection_id))

    async def get_connection_invite(self, connection_id: str, abbr: bool = True) -> str:
        """Return the invitation string for a connection.

        With *abbr* set the server returns the abbreviated invitation form.
        """
        query = encode_bracket_query({"abbr": abbr})
        data = await self._executor.fetch(f"{self._connection_url(connection_id)}/invite?{query}")
        return data["invitationString"]

    async def get_connections(self) -> Any:
        return await self._executor.fetch(f"{self._api}/connections")

    async def get_connection_id_by_their_pw_did(self, their_pw_did: str) -> list[Any]:
        """Find the connection whose peer pairwise DID is *their_pw_did*.

        Returns
        -------
        list
            Zero or one connection record. An empty response body is read
            as no match; a single object body as one match.

        Raises
        ------
        ConnectionLookupError
            If the server reports more than one matching connection. The
            server should never hold two connections for one peer DID, so
            this is surfaced rather than picking one.
        VcxApiError
            On non-2xx responses.
        """
        query = encode_bracket_query({"theirPwDid": their_pw_did})
        data = await self._executor.fetch(f"{self._api}/connections?{query}")
        if data is None:
            return []
        if not isinstance(data, list):
            return [data]
        if len(data) > 1:
            raise ConnectionLookupError(
                their_pw_did,
                f"More than 1 connection with theirPwDid={their_pw_did} found. "
                "This is a VCX API server bug.",
            )
        return data

    async def get_connection(self, connection_id: str) -> Any | None:
        url = self._connection_url(connection_id)
        return await none_if_not_found(lambda: self._executor.fetch(url))

    async def delete_connection(self, connection_id: str) -> Any:
        return await self._executor.remove(self._connection_url(connection_id))

    # ------------------------------------------------------------------
    # Challenges and signatures
    # ------------------------------------------------------------------

    async def create_challenge(self, connection_id: str, challenge_id: str) -> str:
        """Issue a challenge on a connection and return it base64 encoded."""
        data = await self._executor.create(self._challenge_url(connection_id, challenge_id))
        return data["challengeBase64"]

    async def submit_challenge_solution(
        self,
        connection_id: str,
        challenge_id: str,
        signature_base64: str,
    ) -> bool:
        """Submit the peer's signature over a challenge.

        Returns the server's verdict (``success``).
        """
        payload = ChallengeSolution(signature_base64=signature_base64)
        data = await self._executor.create(
            f"{self._challenge_url(connection_id, challenge_id)}/solution",
            payload.to_json(),
        )
        return data["success"]

    async def get_signed_data(self, connection_id: str, string_to_sign: str) -> SignedData:
        url = f"{self._connection_url(connection_id)}/sign/{encode_segment(string_to_sign)}"
        data = await self._executor.fetch(url)
        return SignedData(data=data["data"], signature=data["signature"])

    # ------------------------------------------------------------------
    # Schemas
    # ------------------------------------------------------------------

    async def create_schema(
        self,
        schema_id: str,
        schema_name: str,
        schema_version: str,
        attributes: Sequence[str],
    ) -> Any:
        """Create a new schema on the ledger and record it on the server."""
        payload = SchemaCreateRequest(
            schema_name=schema_name,
            schema_version=schema_version,
            attributes=list(attributes),
        )
        return await self._executor.create(self._schema_url(schema_id), payload.to_json())

    async def load_schema(
        self,
        schema_id: str,
        attributes: Sequence[str],
        schema_ledger_id: str,
    ) -> Any:
        """Record a schema on the server without writing to the ledger.

        *schema_ledger_id* is assumed to already exist on the ledger.
        """
        payload = SchemaLoadRequest(attributes=list(attributes), schema_ledger_id=schema_ledger_id)
        return await self._executor.create(self._schema_url(schema_id), payload.to_json())

    async def get_schemas(self) -> Any:
        return await self._executor.fetch(f"{self._api}/schemas")

    async def get_schema_by_id(self, schema_id: str) -> Any | None:
        url = f"{self._api}/schemas?{encode_selection(schemaId=schema_id)}"
        return await none_if_not_found(lambda: self._executor.fetch(url))

    async def get_schema_by_ledger_id(self, schema_ledger_id: str) -> Any | None:
        url = f"{self._api}/schemas?{encode_selection(schemaLedgerId=schema_ledger_id)}"
        return await none_if_not_found(lambda: self._executor.fetch(url))

    async def delete_schema(self, schema_id: str) -> Any:
        return await self._executor.remove(self._schema_url(schema_id))

    # ------------------------------------------------------------------
    # Credential definitions
    # ------------------------------------------------------------------

    async def create_cred_def(self, schema_id: str, cred_def_id: str, cred_def_name: str) -> Any:
        payload = CredentialDefinitionRequest(schema_id=schema_id, cred_def_name=cred_def_name)
        return await self._executor.create(self._cred_def_url(cred_def_id), payload.to_json())

    async def get_cred_defs(self) -> Any:
        return await self._executor.fetch(f"{self._api}/credential-defs")

    async def get_cred_def(self, cred_def_id: str) -> Any | None:
        url = self._cred_def_url(cred_def_id)
        return await none_if_not_found(lambda: self._executor.fetch(url))

    async def delete_cred_def(self, cred_def_id: str) -> Any:
        return await self._executor.remove(self._cred_def_url(cred_def_id))

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    async def send_credential_by_connection(
        self,
        credential_id: str,
        connection_id: str,
        cred_def_id: str,
        values: Mapping[str, Any],
        credential_name: str,
    ) -> Any:
        """Offer a credential over *connection_id* and return its server id."""
        payload = CredentialOffer(
            cred_def_id=cred_def_id,
            values=dict(values),
            credential_name=credential_name,
        )
        url = f"{self._connection_url(connection_id)}/credentials/{encode_segment(credential_id)}"
        data = await self._executor.create(url, payload.to_json())
        return data["id"]

    async def send_credential_by_their_pw_did(
        self,
        credential_id: str,
        their_pw_did: str,
        cred_def_id: str,
        values: Mapping[str, Any],
        credential_name: str,
    ) -> Any:
        """Offer a credential to the connection identified by the peer's DID.

        Raises
        ------
        ConnectionLookupError
            If no connection, or more than one, matches *their_pw_did*. No
            credential is sent in either case.
        """
        connections = await self.get_connection_id_by_their_pw_did(their_pw_did)
        if not connections:
            raise ConnectionLookupError(
                their_pw_did,
                f"No connection was found by theirPwDid={their_pw_did}",
            )
        return await self.send_credential_by_connection(
            credential_id,
            connections[0]["id"],
            cred_def_id,
            values,
            credential_name,
        )

    async def get_credentials(self) -> Any:
        return await self._executor.fetch(f"{self._api}/credentials")

    async def get_credential(self, credential_id: str) -> Any | None:
        url = self._credential_url(credential_id)
        return await none_if_not_found(lambda: self._executor.fetch(url))

    async def delete_credential(self, credential_id: str) -> Any:
        return await self._executor.remove(self._credential_url(credential_id))

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    async def send_proof_request(
        self,
        connection_id: str,
        attributes: Sequence[Any],
        name: str,
    ) -> Any:
        """Ask the peer on *connection_id* to prove *attributes*; returns the proof id."""
        payload = ProofRequest(attributes=list(attributes), name=name)
        data = await self._executor.create(
            f"{self._connection_url(connection_id)}/proofs",
            payload.to_json(),
        )
        return data["id"]

    async def get_proof(self, proof_id: str) -> Any | None:
        url = self._proof_url(proof_id)
        return await none_if_not_found(lambda: self._executor.fetch(url))

    async def get_proofs(self) -> Any:
        return await self._executor.fetch(f"{self._api}/proofs")

    async def delete_proof(self, proof_id: str) -> Any:
        return await self._executor.remove(self._proof_url(proof_id))

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def send_message(self, connection_id: str, msg: str, type: str, title: str) -> Any:
        payload = MessageRequest(msg=msg, type=type, title=title)
        return await self._executor.create(self._messages_url(connection_id), payload.to_json())

    async def get_messages(
        self,
        connection_id: str,
        types: Sequence[str] | None = None,
        statuses: Sequence[str] | None = None,
    ) -> Any:
        """List messages on a connection, filtered by message type and status."""
        query = encode_bracket_query({"types": types, "statuses": statuses})
        url = self._messages_url(connection_id)
        if query:
            url = f"{url}?{query}"
        return await self._executor.fetch(url)

    async def update_messages(self, connection_id: str, uids: Sequence[str]) -> Any:
        payload = MessageUpdate(uids=list(uids))
        return await self._executor.replace(self._messages_url(connection_id), payload.to_json())

    # ------------------------------------------------------------------
    # URL helpers
    # ------------------------------------------------------------------

    def _connection_url(self, connection_id: str) -> str:
        return f"{self._api}/connections/{encode_segment(connection_id)}"

    def _challenge_url(self, connection_id: str, challenge_id: str) -> str:
        return f"{self._connection_url(connection_id)}/challenges/{encode_segment(challenge_id)}"

    def _messages_url(self, connection_id: str) -> str:
        return f"{self._connection_url(connection_id)}/messages"

    def _schema_url(self, schema_id: str) -> str:
        return f"{self._api}/schemas/{encode_segment(schema_id)}"

    def _cred_def_url(self, cred_def_id: str) -> str:
        return f"{self._api}/credential-defs/{encode_segment(cred_def_id)}"

    def _credential_url(self, credential_id: str) -> str:
        return f"{self._api}/credentials/{encode_segment(credential_id)}"

    def _proof_url(self, proof_id: str) -> str:
        return f"{self._api}/proofs/{encode_segment(proof_id)}"


def create_client(
    base_url: str,
    auth: tuple[str, str] | None = None,
    logger: DiagnosticSink | None = None,
) -> VcxApiClient:
    """Build a :class:`VcxApiClient` with an internally managed HTTP client."""
    return VcxApiClient(base_url, auth=auth, logger=logger)
