"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

AWS Auth Signers computes AWS request signatures: Signature Version 4
Authorization headers and query parameters, legacy Signature Version 2
signatures and the chunk signatures of ``aws-chunked`` streaming uploads.
It performs no network I/O.
"""

from __future__ import annotations

from ._crypto import hashed_data
from ._identity import AWSCredentialIdentity
from ._version import __version__
from .auth import AWSAuth
from .chunked import ChunkedSigner, ChunkStream
from .descriptor import MIN_CHUNK_SIZE, RequestDescriptor
from .signers import SigV2Signer, SigV4Signer
from .types import (
    HttpRequestMethod,
    Mode,
    Region,
    Service,
    SigningAlgorithm,
    SigningVersion,
    parse_timestamp,
)

__license__ = "Apache-2.0"
__version__ = __version__

__all__ = (
    "AWSAuth",
    "AWSCredentialIdentity",
    "ChunkStream",
    "ChunkedSigner",
    "HttpRequestMethod",
    "MIN_CHUNK_SIZE",
    "Mode",
    "Region",
    "RequestDescriptor",
    "Service",
    "SigV2Signer",
    "SigV4Signer",
    "SigningAlgorithm",
    "SigningVersion",
    "hashed_data",
    "parse_timestamp",
)
