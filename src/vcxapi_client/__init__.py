# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""vcxapi-client — async client for the VCX API credential-exchange service.

Quickstart
----------
>>> import asyncio
>>> import logging
>>> from vcxapi_client import VcxApiClient
>>> client = VcxApiClient(
...     "https://vcx.example.com",
...     auth=("admin", "secret"),
...     logger=logging.getLogger("vcx"),
... )
>>> connection = asyncio.run(client.get_connection("alice"))
>>> print(connection is None)
True

Configuration can also come from the environment:

>>> from vcxapi_client import ClientConfig
>>> client = VcxApiClient.from_config(ClientConfig.from_env())
"""

from .client import VcxApiClient, create_client
from .config import ClientConfig
from .executor import RequestExecutor, none_if_not_found
from .logging_config import DiagnosticSink, NullSink, get_logger
from .query import encode_bracket_query
from .types import (
    ChallengeSolution,
    ConnectionLookupError,
    CredentialDefinitionRequest,
    CredentialOffer,
    HttpVerb,
    MessageRequest,
    MessageUpdate,
    ProofRequest,
    SchemaCreateRequest,
    SchemaLoadRequest,
    SchemaMethod,
    SignedData,
    VcxApiError,
    VcxClientError,
)

__all__ = [
    # Primary client
    "VcxApiClient",
    "create_client",
    "ClientConfig",
    # Request execution
    "RequestExecutor",
    "HttpVerb",
    "none_if_not_found",
    "encode_bracket_query",
    # Diagnostics
    "DiagnosticSink",
    "NullSink",
    "get_logger",
    # Payload and result types
    "ChallengeSolution",
    "CredentialDefinitionRequest",
    "CredentialOffer",
    "MessageRequest",
    "MessageUpdate",
    "ProofRequest",
    "SchemaCreateRequest",
    "SchemaLoadRequest",
    "SchemaMethod",
    "SignedData",
    # Exceptions
    "VcxClientError",
    "VcxApiError",
    "ConnectionLookupError",
]
