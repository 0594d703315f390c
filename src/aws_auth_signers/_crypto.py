"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

Hashing primitives used by the signers.

The digest constructor is resolved once per process, the first time any
primitive is used. Every failure of the underlying library surfaces as a
:class:`~aws_auth_signers.exceptions.CryptoError`.
"""

import hashlib
import hmac
import logging
import threading
from collections.abc import Callable
from functools import cache
from typing import Any

from .exceptions import CryptoError

logger = logging.getLogger(__name__)

_init_lock = threading.Lock()


@cache
def _load_sha256() -> Callable[..., Any]:
    try:
        hashlib.new("sha256")
    except ValueError as e:
        raise CryptoError("SHA-256 is not available from hashlib.") from e
    logger.debug("SHA-256 primitives initialized")
    return hashlib.sha256


def init() -> Callable[..., Any]:
    """Initialize the hashing backend, returning the SHA-256 constructor.

    Safe to call from any thread; the backend is only loaded once.
    """
    with _init_lock:
        return _load_sha256()


def _to_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        try:
            return data.encode("utf-8")
        except UnicodeEncodeError as e:
            raise CryptoError(f"Unable to encode data for hashing: {e}") from e
    return data


def sha256(data: bytes | str) -> bytes:
    digestmod = init()
    try:
        return digestmod(_to_bytes(data)).digest()
    except ValueError as e:
        raise CryptoError(f"SHA-256 failed: {e}") from e


def hmac_sha256(key: bytes, data: bytes | str) -> bytes:
    digestmod = init()
    try:
        return hmac.new(key=key, msg=_to_bytes(data), digestmod=digestmod).digest()
    except ValueError as e:
        raise CryptoError(f"HMAC-SHA256 failed: {e}") from e


def hashed_data(data: bytes | str | None = None) -> str:
    """Hex encoded SHA-256 digest of ``data``, or of the empty string."""
    if data is None:
        data = b""
    return sha256(data).hex()
