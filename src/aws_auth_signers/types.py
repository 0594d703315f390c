"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

import sys
from datetime import datetime
from enum import Enum
from typing import Self

from .exceptions import ParseError

if sys.version_info < (3, 12):
    from datetime import timezone

    UTC = timezone.utc
else:
    from datetime import UTC

SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"
SIGV4_DATE_FORMAT: str = "%Y%m%d"


class _ClosedEnum(Enum):
    """Enum with a fixed wire form and a strict parser for it."""

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def from_string(cls, value: str) -> Self:
        for member in cls:
            if member.value == value:
                return member
        raise ParseError(f"Unable to parse {cls.__name__} from {value!r}.")


class Region(_ClosedEnum):
    US_EAST_1 = "us-east-1"
    US_WEST_1 = "us-west-1"
    US_WEST_2 = "us-west-2"
    EU_WEST_1 = "eu-west-1"
    EU_CENTRAL_1 = "eu-central-1"
    AP_SOUTHEAST_1 = "ap-southeast-1"
    AP_NORTHEAST_1 = "ap-northeast-1"
    AP_SOUTHEAST_2 = "ap-southeast-2"
    SA_EAST_1 = "sa-east-1"


class Service(_ClosedEnum):
    DYNAMODB = "dynamodb"
    EC2 = "ec2"
    IAM = "iam"
    S3 = "s3"
    STS = "sts"


class HttpRequestMethod(_ClosedEnum):
    """Request methods from :rfc:`7231#section-4`."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


class Mode(Enum):
    """How the payload is transferred.

    ``NORMAL`` signs the whole payload at once. ``CHUNKED`` signs an
    ``aws-chunked`` body where every chunk carries its own signature.
    """

    NORMAL = "normal"
    CHUNKED = "chunked"


class SigningVersion(Enum):
    # Only use version two if the API doesn't support version four yet.
    TWO = 2
    FOUR = 4


class SigningAlgorithm(_ClosedEnum):
    AWS4_HMAC_SHA256 = "AWS4-HMAC-SHA256"
    AWS4_HMAC_SHA256_PAYLOAD = "AWS4-HMAC-SHA256-PAYLOAD"


def parse_timestamp(value: str) -> datetime:
    """Parse a ``YYYYMMDDTHHMMSSZ`` timestamp into an aware UTC datetime."""
    try:
        parsed = datetime.strptime(value, SIGV4_TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as e:
        raise ParseError(
            f"Expected a timestamp formatted as {SIGV4_TIMESTAMP_FORMAT}, "
            f"received {value!r}."
        ) from e
    return parsed.replace(tzinfo=UTC)
