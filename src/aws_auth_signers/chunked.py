"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

Signing for ``aws-chunked`` uploads (``STREAMING-AWS4-HMAC-SHA256-PAYLOAD``).

The seed signature is sent in the ``Authorization`` header. Each chunk's
signature chains off the previous one, starting from the seed, and the
body ends with a signed zero-length chunk.
"""

import logging
from collections.abc import Iterator

from . import _crypto
from .descriptor import RequestDescriptor
from .exceptions import MissingExpectedParameterException, ModeError
from .signers import SigV4Signer
from .types import SIGV4_TIMESTAMP_FORMAT, Mode, SigningAlgorithm

logger = logging.getLogger(__name__)

CHUNK_SIGNATURE_PREFIX: str = ";chunk-signature="
CRLF: bytes = b"\r\n"
# len(";chunk-signature=") + hex signature + two CRLFs
CHUNK_FRAME_OVERHEAD: int = len(CHUNK_SIGNATURE_PREFIX) + 64 + 2 * len(CRLF)


def _require_chunked(request: RequestDescriptor, operation: str) -> None:
    if request.mode is not Mode.CHUNKED:
        raise ModeError(
            f"{operation} is only available in chunked mode. "
            f"Current mode: {request.mode.name}."
        )


class ChunkedSigner:
    """Stateless signer for the chunked streaming protocol.

    Nothing is tracked between calls: every chunk must be signed with the
    signature of the chunk before it, or the seed signature for the first
    chunk. AWS rejects a body whose chain is broken, but that can't be
    detected here. :class:`ChunkStream` keeps track of the chain instead.
    """

    def __init__(self, *, signer: SigV4Signer | None = None):
        self._signer = signer or SigV4Signer()

    def seed_signature(self, *, request: RequestDescriptor) -> str:
        return self._signer.seed_signature(request=request)

    def auth_header(self, *, request: RequestDescriptor) -> str:
        """``Authorization`` header value carrying the seed signature."""
        _require_chunked(request, "The chunked Authorization header")
        return self._signer.auth_header(request=request)

    def chunk_signature(
        self,
        *,
        request: RequestDescriptor,
        previous_signature: str,
        chunk: bytes,
    ) -> str:
        """Sign ``chunk``, chaining off ``previous_signature``.

        An empty ``chunk`` is the terminating chunk. It must be signed and
        framed like any other.
        """
        _require_chunked(request, "Chunk signing")
        if request.algorithm is not SigningAlgorithm.AWS4_HMAC_SHA256_PAYLOAD:
            raise ModeError(
                "Chunk signatures require the "
                f"{SigningAlgorithm.AWS4_HMAC_SHA256_PAYLOAD} algorithm, "
                f"current algorithm is {request.algorithm}."
            )
        # The empty-string hash is a fixed field of every chunk string to sign.
        string_to_sign = (
            f"{request.algorithm}\n"
            f"{request.date.strftime(SIGV4_TIMESTAMP_FORMAT)}\n"
            f"{self._signer.scope(request=request)}\n"
            f"{previous_signature}\n"
            f"{_crypto.hashed_data()}\n"
            f"{_crypto.hashed_data(chunk)}"
        )
        logger.debug("ChunkStringToSign:\n%s", string_to_sign)
        return self._signer.sign_string(request=request, string_to_sign=string_to_sign)

    def chunk_body(
        self, *, request: RequestDescriptor, chunk_signature: str, chunk: bytes
    ) -> bytes:
        """Frame ``chunk`` as ``<hex size>;chunk-signature=<sig>\\r\\n<data>\\r\\n``."""
        _require_chunked(request, "Chunk framing")
        header = f"{len(chunk):x}{CHUNK_SIGNATURE_PREFIX}{chunk_signature}"
        return b"".join((header.encode(), CRLF, chunk, CRLF))

    def content_length(self, *, request: RequestDescriptor, payload_size: int) -> int:
        """Size of the framed body for a payload of ``payload_size`` bytes.

        Counts every full chunk, the final partial chunk and the terminating
        zero-length chunk, so this is the ``Content-Length`` to send.
        """
        chunk_size = request.chunk_size
        if chunk_size <= 0:
            raise MissingExpectedParameterException(
                "A positive chunk size is required to compute the content length."
            )
        if payload_size < 0:
            raise ValueError(f"Payload size can't be negative, got {payload_size}.")

        remaining = payload_size
        length = 0
        while True:
            size = min(remaining, chunk_size)
            length += size + len(f"{size:x}") + CHUNK_FRAME_OVERHEAD
            if remaining == 0:
                break
            remaining = max(remaining - chunk_size, 0)
        return length


class ChunkStream:
    """Signs and frames the chunks of one upload in order.

    The seed signature is computed up front and each call to :meth:`frame`
    chains off the signature of the previous chunk::

        stream = ChunkStream(request)
        http_headers["Authorization"] = stream.authorization
        for frame in stream.iter_frames(payload):
            send(frame)

    The seed and the ``Authorization`` header are computed with the
    ``AWS4-HMAC-SHA256`` algorithm and chunks with
    ``AWS4-HMAC-SHA256-PAYLOAD``, whichever one ``request`` holds. Both use
    copies, so the caller's descriptor is left as it is.
    """

    def __init__(
        self, request: RequestDescriptor, *, signer: ChunkedSigner | None = None
    ):
        self._signer = signer or ChunkedSigner()
        # The seed and the header always use the plain algorithm.
        seed_request = request.copy().set_algorithm(SigningAlgorithm.AWS4_HMAC_SHA256)
        self.seed_signature = self._signer.seed_signature(request=seed_request)
        self.authorization = self._signer.auth_header(request=seed_request)
        self._request = request.copy().set_algorithm(
            SigningAlgorithm.AWS4_HMAC_SHA256_PAYLOAD
        )
        self.previous_signature = self.seed_signature
        self.finished = False

    def frame(self, chunk: bytes) -> bytes:
        """Sign and frame the next chunk. An empty chunk ends the stream."""
        if self.finished:
            raise ModeError("The terminating chunk has already been framed.")
        signature = self._signer.chunk_signature(
            request=self._request,
            previous_signature=self.previous_signature,
            chunk=chunk,
        )
        self.previous_signature = signature
        if not chunk:
            self.finished = True
        return self._signer.chunk_body(
            request=self._request, chunk_signature=signature, chunk=chunk
        )

    def finish(self) -> bytes:
        return self.frame(b"")

    def iter_frames(self, payload: bytes) -> Iterator[bytes]:
        """Yield the framed chunks of ``payload``, then the terminating frame."""
        chunk_size = self._request.chunk_size
        if chunk_size <= 0:
            raise MissingExpectedParameterException(
                "A positive chunk size is required to split the payload."
            )
        for offset in range(0, len(payload), chunk_size):
            yield self.frame(payload[offset : offset + chunk_size])
        yield self.finish()
