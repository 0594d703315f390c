"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from typing import Self

from .chunked import ChunkedSigner
from .descriptor import RequestDescriptor
from .signers import SigV2Signer, SigV4Signer
from .types import Mode, SigningVersion


class AWSAuth:
    """Single entry point for every signing artifact of a request.

    Dispatches to the version 4, version 2 or chunked signer according to
    the descriptor's ``version`` and ``mode``. The descriptor is read on
    every call, so changes made between calls are picked up.
    """

    def __init__(self, request: RequestDescriptor):
        self.request = request
        self._sigv4 = SigV4Signer()
        self._sigv2 = SigV2Signer()
        self._chunked = ChunkedSigner(signer=self._sigv4)

    @classmethod
    def from_url(cls, url: str) -> Self:
        return cls(RequestDescriptor.from_url(url))

    def auth_header(self) -> str:
        if self.request.mode is Mode.CHUNKED:
            return self._chunked.auth_header(request=self.request)
        return self._sigv4.auth_header(request=self.request)

    def signature(self) -> str:
        """Hex signature for version 4, percent-encoded base64 for version 2."""
        if self.request.version is SigningVersion.TWO:
            return self._sigv2.signature(request=self.request)
        return self._sigv4.signature(request=self.request)

    def query_string(self) -> str:
        return self._sigv4.query_string(request=self.request)

    def seed_signature(self) -> str:
        return self._chunked.seed_signature(request=self.request)

    def chunk_signature(self, previous_signature: str, chunk: bytes) -> str:
        return self._chunked.chunk_signature(
            request=self.request, previous_signature=previous_signature, chunk=chunk
        )

    def chunk_body(self, chunk_signature: str, chunk: bytes) -> bytes:
        return self._chunked.chunk_body(
            request=self.request, chunk_signature=chunk_signature, chunk=chunk
        )

    def content_length(self, payload_size: int) -> int:
        return self._chunked.content_length(
            request=self.request, payload_size=payload_size
        )
