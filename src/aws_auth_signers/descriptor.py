"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from copy import deepcopy
from datetime import datetime
from typing import Self
from urllib.parse import unquote, urlsplit

from ._identity import AWSCredentialIdentity
from .exceptions import EncodingError
from .types import (
    UTC,
    HttpRequestMethod,
    Mode,
    Region,
    Service,
    SigningAlgorithm,
    SigningVersion,
    parse_timestamp,
)

# AWS rejects chunks smaller than this, except for the final chunk.
MIN_CHUNK_SIZE: int = 8192


class RequestDescriptor:
    """Everything needed to sign a single request.

    A descriptor is usually created with :meth:`from_url` and configured
    through its chained setters::

        request = (
            RequestDescriptor.from_url("https://examplebucket.s3.amazonaws.com/test.txt")
            .set_method("GET")
            .set_region("us-east-1")
            .set_service("s3")
            .add_header("Host", "examplebucket.s3.amazonaws.com")
        )

    Signers only read from the descriptor. It isn't synchronized, so
    finish configuring it before sharing it between threads.
    """

    def __init__(
        self,
        *,
        path: str = "",
        query: str = "",
        host: str | None = None,
    ):
        self.method: HttpRequestMethod = HttpRequestMethod.GET
        self.path: str = path
        self.query: str = query
        self.host: str | None = host
        self.headers: dict[str, str] = {}
        self.access_key_id: str = ""
        self.secret_access_key: str = ""
        self.region: Region = Region.US_EAST_1
        self.service: Service = Service.S3
        self.date: datetime = datetime.now(UTC)
        self.payload_hash: str = ""
        self.mode: Mode = Mode.NORMAL
        self.chunk_size: int = 0
        self.version: SigningVersion = SigningVersion.FOUR
        self.algorithm: SigningAlgorithm = SigningAlgorithm.AWS4_HMAC_SHA256
        self.seed: bool = True

    @classmethod
    def from_url(cls, url: str) -> Self:
        """Create a descriptor from the path, query and host of ``url``.

        The path is percent-decoded; the query is kept as given and decoded
        per parameter during canonicalization.
        """
        parsed = urlsplit(url)
        try:
            path = unquote(parsed.path, errors="strict")
        except UnicodeDecodeError as e:
            raise EncodingError(f"Unable to decode path {parsed.path!r}: {e}") from e
        return cls(path=path, query=parsed.query, host=parsed.hostname)

    def __repr__(self) -> str:
        return (
            f"RequestDescriptor(method={self.method}, path={self.path!r}, "
            f"query={self.query!r}, host={self.host!r}, region={self.region}, "
            f"service={self.service}, mode={self.mode.name}, "
            f"version={self.version.name})"
        )

    def copy(self) -> Self:
        """Independent copy of this descriptor."""
        return deepcopy(self)

    def add_header(self, name: str, value: str) -> Self:
        """Add a header to be signed.

        Names are compared case-insensitively, so a header whose lowercase
        name is already present replaces the existing entry.
        """
        for existing in list(self.headers):
            if existing.lower() == name.lower():
                del self.headers[existing]
        self.headers[name] = value
        return self

    def set_method(self, method: HttpRequestMethod | str) -> Self:
        if isinstance(method, str):
            method = HttpRequestMethod.from_string(method.upper())
        self.method = method
        return self

    def set_path(self, path: str) -> Self:
        self.path = path
        return self

    def set_query(self, query: str) -> Self:
        self.query = query
        return self

    def set_host(self, host: str) -> Self:
        """Set the host, only used by signature version 2."""
        self.host = host
        return self

    def set_access_key_id(self, access_key_id: str) -> Self:
        self.access_key_id = access_key_id
        return self

    def set_secret_access_key(self, secret_access_key: str) -> Self:
        self.secret_access_key = secret_access_key
        return self

    def set_identity(self, identity: AWSCredentialIdentity) -> Self:
        """Set both keys from ``identity`` after checking it's still valid."""
        if not isinstance(identity, AWSCredentialIdentity):
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise ValueError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )
        self.access_key_id = identity.access_key_id
        self.secret_access_key = identity.secret_access_key
        return self

    def set_region(self, region: Region | str) -> Self:
        if isinstance(region, str):
            region = Region.from_string(region)
        self.region = region
        return self

    def set_service(self, service: Service | str) -> Self:
        if isinstance(service, str):
            service = Service.from_string(service)
        self.service = service
        return self

    def set_date(self, date: datetime | str) -> Self:
        """Set the scope date; requests are valid for 7 days from this date.

        This doesn't have to match the ``x-amz-date`` or ``date`` headers.
        Naive datetimes are assumed to be UTC.
        """
        if isinstance(date, str):
            date = parse_timestamp(date)
        elif date.tzinfo is None:
            date = date.replace(tzinfo=UTC)
        else:
            date = date.astimezone(UTC)
        self.date = date
        return self

    def set_payload_hash(self, payload_hash: str) -> Self:
        """Set the SHA-256 hex digest of the payload.

        Use the digest of the empty string when there is no payload.
        """
        self.payload_hash = payload_hash
        return self

    def set_mode(self, mode: Mode) -> Self:
        self.mode = mode
        return self

    def set_chunk_size(self, chunk_size: int) -> Self:
        """Set the size of every chunk but the last in chunked mode.

        AWS requires at least :data:`MIN_CHUNK_SIZE` bytes and recommends 64
        KiB or more. The final chunk may be smaller, as may a payload that
        fits in a single chunk. The size isn't validated here.
        """
        self.chunk_size = chunk_size
        return self

    def set_version(self, version: SigningVersion) -> Self:
        self.version = version
        return self

    def set_algorithm(self, algorithm: SigningAlgorithm | str) -> Self:
        if isinstance(algorithm, str):
            algorithm = SigningAlgorithm.from_string(algorithm)
        self.algorithm = algorithm
        return self

    def set_seed(self, seed: bool) -> Self:
        """Choose between the seed signature and the final payload signature.

        Only meaningful in chunked mode.
        """
        self.seed = seed
        return self
