# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Shared value types for the vcxapi-client Python SDK."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class HttpVerb(str, Enum):
    """HTTP verbs used by the request executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class SchemaMethod(str, Enum):
    """How the server should obtain a schema record."""

    # Write a new schema to the ledger.
    CREATE = "create"
    # Record a schema that already exists on the ledger.
    LOAD = "load"


@dataclass(frozen=True)
class SignedData:
    """Data signed by the server with a connection's key."""

    data: Any
    signature: Any


@dataclass(frozen=True)
class ChallengeSolution:
    """Signature submitted in answer to a challenge."""

    signature_base64: str

    def to_json(self) -> dict[str, Any]:
        return {"signatureBase64": self.signature_base64}


@dataclass(frozen=True)
class SchemaCreateRequest:
    """Payload for creating a new schema on the ledger."""

    schema_name: str
    schema_version: str
    attributes: list[str]

    def to_json(self) -> dict[str, Any]:
        return {
            "schemaName": self.schema_name,
            "schemaVersion": self.schema_version,
            "attributes": list(self.attributes),
            "method": SchemaMethod.CREATE.value,
        }


@dataclass(frozen=True)
class SchemaLoadRequest:
    """Payload for recording a schema that is already on the ledger."""

    attributes: list[str]
    schema_ledger_id: str

    def to_json(self) -> dict[str, Any]:
        return {
            "attributes": list(self.attributes),
            "schemaLedgerId": self.schema_ledger_id,
            "method": SchemaMethod.LOAD.value,
        }


@dataclass(frozen=True)
class CredentialDefinitionRequest:
    schema_id: str
    cred_def_name: str

    def to_json(self) -> dict[str, Any]:
        return {"schemaId": self.schema_id, "credDefName": self.cred_def_name}


@dataclass(frozen=True)
class CredentialOffer:
    """Payload for issuing a credential over a connection."""

    cred_def_id: str
    # Attribute name -> value, as expected by the credential definition.
    values: dict[str, Any]
    credential_name: str

    def to_json(self) -> dict[str, Any]:
        return {
            "credDefId": self.cred_def_id,
            "values": dict(self.values),
            "credentialName": self.credential_name,
        }


@dataclass(frozen=True)
class ProofRequest:
    attributes: list[Any]
    name: str

    def to_json(self) -> dict[str, Any]:
        return {"attributes": list(self.attributes), "name": self.name}


@dataclass(frozen=True)
class MessageRequest:
    msg: str
    type: str
    title: str

    def to_json(self) -> dict[str, Any]:
        return {"msg": self.msg, "type": self.type, "title": self.title}


@dataclass(frozen=True)
class MessageUpdate:
    """Opaque message uids to mark as updated."""

    uids: list[str]

    def to_json(self) -> dict[str, Any]:
        return {"uids": list(self.uids)}


class VcxClientError(Exception):
    """Base class for errors raised by the VCX API client."""


class VcxApiError(VcxClientError):
    """Raised when a request fails at the transport level or with a non-2xx status.

    ``status_code`` is ``0`` when no response was received.
    """

    def __init__(
        self,
        status_code: int,
        method: str,
        endpoint: str,
        body: Any = None,
        message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.method = method
        self.endpoint = endpoint
        self.body = body
        detail = message if message is not None else f"response body: {body!r}"
        super().__init__(f"VcxApiClient [{status_code}] {method} {endpoint}: {detail}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class ConnectionLookupError(VcxClientError):
    """Raised when a peer DID resolves to no connection, or to more than one."""

    def __init__(self, their_pw_did: str, message: str) -> None:
        self.their_pw_did = their_pw_did
        super().__init__(message)
