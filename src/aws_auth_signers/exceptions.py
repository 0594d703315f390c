"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""


class BaseAWSSDKException(Exception):
    """Top-level exception to capture SDK-related errors."""

    ...


class EncodingError(BaseAWSSDKException, ValueError):
    """A value could not be percent-encoded or decoded."""

    ...


class CryptoError(BaseAWSSDKException):
    """The underlying hash or HMAC primitive failed."""

    ...


class ParseError(BaseAWSSDKException, ValueError):
    """A timestamp, region, service or method string could not be parsed."""

    ...


class ModeError(BaseAWSSDKException):
    """The operation isn't valid for the request's mode, version or algorithm."""

    ...


class MissingExpectedParameterException(BaseAWSSDKException, ValueError):
    """Some APIs require specific signing properties to be present."""

    ...
