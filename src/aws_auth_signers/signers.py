"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import base64
import logging
from urllib.parse import quote, unquote

from . import _crypto
from .descriptor import RequestDescriptor
from .exceptions import EncodingError, MissingExpectedParameterException, ModeError
from .types import (
    SIGV4_DATE_FORMAT,
    SIGV4_TIMESTAMP_FORMAT,
    Mode,
    SigningVersion,
)

logger = logging.getLogger(__name__)

AWS4_REQUEST: str = "aws4_request"
STREAMING_PAYLOAD: str = "STREAMING-AWS4-HMAC-SHA256-PAYLOAD"


def _uri_encode(value: str, *, safe: str = "") -> str:
    try:
        return quote(string=value, safe=safe)
    except UnicodeEncodeError as e:
        raise EncodingError(f"Unable to percent-encode {value!r}: {e}") from e


def _uri_decode(value: str) -> str:
    try:
        return unquote(string=value, errors="strict")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Unable to percent-decode {value!r}: {e}") from e


class Canonicalizer:
    """Canonical forms of the parts of a request that get signed."""

    def canonical_uri(self, *, request: RequestDescriptor) -> str:
        """Percent-encode the path, leaving ``/`` unescaped.

        An empty path is canonicalized as ``/``.
        """
        if not request.path:
            return "/"
        return _uri_encode(request.path, safe="/")

    def canonical_query_string(self, *, request: RequestDescriptor) -> str:
        """Percent-encode every parameter name and value, sorted by name.

        Each part is decoded before it's encoded again, so a query that is
        already canonical comes back unchanged.
        """
        if not request.query:
            return ""

        query_parts = []
        for pair in request.query.split("&"):
            if not pair:
                continue
            key, _, value = pair.partition("=")
            query_parts.append(
                (_uri_encode(_uri_decode(key)), _uri_encode(_uri_decode(value)))
            )
        # key-value pairs must be in sorted order for their encoded forms.
        return "&".join(f"{key}={value}" for key, value in sorted(query_parts))

    def canonical_headers(self, *, request: RequestDescriptor) -> str:
        return "".join(
            f"{name.lower()}:{value.strip()}\n"
            for name, value in sorted(
                request.headers.items(), key=lambda item: item[0].lower()
            )
        )

    def signed_headers(self, *, request: RequestDescriptor) -> str:
        return ";".join(sorted(name.lower() for name in request.headers))


class SigV4Signer(Canonicalizer):
    """
    Request signer for applying the AWS Signature Version 4 algorithm.
    """

    def signature(self, *, request: RequestDescriptor) -> str:
        """Hex encoded signature of the request.

        In chunked mode with the seed flag set this is the seed signature,
        otherwise the signature covers ``request.payload_hash``.
        """
        canonical_request = self.canonical_request(request=request)
        logger.debug("CanonicalRequest:\n%s", canonical_request)
        string_to_sign = self.string_to_sign(
            request=request, canonical_request=canonical_request
        )
        logger.debug("StringToSign:\n%s", string_to_sign)
        signature = self.sign_string(request=request, string_to_sign=string_to_sign)
        logger.debug("Signature:\n%s", signature)
        return signature

    def seed_signature(self, *, request: RequestDescriptor) -> str:
        """Signature over the headers of a chunked upload.

        The canonical request ends in ``STREAMING-AWS4-HMAC-SHA256-PAYLOAD``
        instead of the payload hash.
        """
        if request.mode is not Mode.CHUNKED:
            raise ModeError(
                "The seed signature is only available in chunked mode. "
                f"Current mode: {request.mode.name}."
            )
        if not request.seed:
            raise ModeError("The seed flag must be set to compute the seed signature.")
        return self.signature(request=request)

    def auth_header(self, *, request: RequestDescriptor) -> str:
        """Generate the value of the ``Authorization`` header.

        In chunked mode the header carries the seed signature.
        """
        if request.version is not SigningVersion.FOUR:
            raise ModeError(
                "The Authorization header is only generated for signature version 4."
            )
        if request.mode is Mode.CHUNKED and not request.seed:
            raise ModeError(
                "The Authorization header of a chunked upload carries the seed "
                "signature. Set the seed flag to generate it."
            )
        return (
            f"{request.algorithm} Credential={self.credential(request=request)},"
            f"SignedHeaders={self.signed_headers(request=request)},"
            f"Signature={self.signature(request=request)}"
        )

    def query_string(self, *, request: RequestDescriptor) -> str:
        """Generate the signing parameters as a query string fragment."""
        if request.mode is not Mode.NORMAL or request.version is not SigningVersion.FOUR:
            raise ModeError(
                "Query string signing requires normal mode and signature version 4. "
                f"Current mode: {request.mode.name}, version: {request.version.name}."
            )
        credential = _uri_encode(self.credential(request=request))
        signed_headers = _uri_encode(self.signed_headers(request=request))
        return (
            f"X-Amz-Algorithm={request.algorithm}"
            f"&X-Amz-Credential={credential}"
            f"&X-Amz-Date={request.date.strftime(SIGV4_TIMESTAMP_FORMAT)}"
            f"&X-Amz-SignedHeaders={signed_headers}"
            f"&X-Amz-Signature={self.signature(request=request)}"
        )

    def canonical_request(self, *, request: RequestDescriptor) -> str:
        if request.mode is Mode.CHUNKED and request.seed:
            canonical_payload = STREAMING_PAYLOAD
        else:
            canonical_payload = request.payload_hash
        return (
            f"{request.method}\n"
            f"{self.canonical_uri(request=request)}\n"
            f"{self.canonical_query_string(request=request)}\n"
            f"{self.canonical_headers(request=request)}\n"
            f"{self.signed_headers(request=request)}\n"
            f"{canonical_payload}"
        )

    def string_to_sign(
        self, *, request: RequestDescriptor, canonical_request: str
    ) -> str:
        return (
            f"{request.algorithm}\n"
            f"{request.date.strftime(SIGV4_TIMESTAMP_FORMAT)}\n"
            f"{self.scope(request=request)}\n"
            f"{_crypto.hashed_data(canonical_request)}"
        )

    def scope(self, *, request: RequestDescriptor) -> str:
        formatted_date = request.date.strftime(SIGV4_DATE_FORMAT)
        # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
        return f"{formatted_date}/{request.region}/{request.service}/{AWS4_REQUEST}"

    def credential(self, *, request: RequestDescriptor) -> str:
        if not request.access_key_id:
            raise MissingExpectedParameterException(
                "An access key id is required to build the signing credential."
            )
        return f"{request.access_key_id}/{self.scope(request=request)}"

    def signing_key(self, *, request: RequestDescriptor) -> bytes:
        """Derive the signing key for the request's scope.

        In SigV4, a signing key is created that is scoped to a specific region and
        service. The date, region, service and resulting signing key are individually
        hashed, then the composite hash is used to sign the string to sign.

        DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
        DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
        DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
        SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")
        """
        if not request.secret_access_key:
            raise MissingExpectedParameterException(
                "A secret access key is required to derive the signing key."
            )
        k_date = _crypto.hmac_sha256(
            f"AWS4{request.secret_access_key}".encode(),
            request.date.strftime(SIGV4_DATE_FORMAT),
        )
        k_region = _crypto.hmac_sha256(k_date, str(request.region))
        k_service = _crypto.hmac_sha256(k_region, str(request.service))
        return _crypto.hmac_sha256(k_service, AWS4_REQUEST)

    def sign_string(self, *, request: RequestDescriptor, string_to_sign: str) -> str:
        # The key is derived again for every call.
        signing_key = self.signing_key(request=request)
        return _crypto.hmac_sha256(signing_key, string_to_sign).hex()


class SigV2Signer(Canonicalizer):
    """
    Request signer for the legacy AWS Signature Version 2 algorithm.

    The secret key is used directly as the HMAC key and only the method,
    host, path and query are signed.
    """

    def signature(self, *, request: RequestDescriptor) -> str:
        """Base64 signature, percent-encoded for use in a query string."""
        string_to_sign = self.string_to_sign(request=request)
        logger.debug("StringToSign:\n%s", string_to_sign)
        if not request.secret_access_key:
            raise MissingExpectedParameterException(
                "A secret access key is required for signature version 2."
            )
        digest = _crypto.hmac_sha256(request.secret_access_key.encode(), string_to_sign)
        signature = base64.b64encode(digest).decode()
        logger.debug("Signature:\n%s", signature)
        return _uri_encode(signature)

    def string_to_sign(self, *, request: RequestDescriptor) -> str:
        if not request.host:
            raise MissingExpectedParameterException(
                "Signature version 2 requires the request host."
            )
        return (
            f"{request.method}\n"
            f"{request.host}\n"
            f"{self.canonical_uri(request=request)}\n"
            f"{self.canonical_query_string(request=request)}"
        )
