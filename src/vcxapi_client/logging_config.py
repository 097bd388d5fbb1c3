# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Diagnostic sinks used by the request executor.

The executor never decides where records go. It writes to a *sink*: any
object exposing ``debug``, ``warning`` and ``error`` with the
:class:`logging.Logger` call signature. When the caller does not supply one,
:class:`NullSink` discards everything.

To route records into the host application's logging tree, pass
:func:`get_logger` (or any :class:`logging.Logger`) as the client's
``logger``.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

LOGGER_NAME = "vcxapi_client"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


@runtime_checkable
class DiagnosticSink(Protocol):
    """Leveled text sink. :class:`logging.Logger` satisfies this protocol.

    The warning level is spelled ``warning``, not ``warn``, so that any
    :class:`logging.Logger` can be passed in unchanged (``Logger.warn`` is
    deprecated). Sinks exposing only ``warn`` do not satisfy the protocol
    and must be wrapped, e.g. in a :class:`logging.LoggerAdapter`.
    """

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


class NullSink:
    """Sink that drops every record."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        return None

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        return None

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        return None


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when *name* is given."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def resolve_sink(logger: DiagnosticSink | None) -> DiagnosticSink:
    return NullSink() if logger is None else logger
