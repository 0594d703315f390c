"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from datetime import datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from aws_auth_signers import (
    AWSCredentialIdentity,
    HttpRequestMethod,
    Mode,
    Region,
    RequestDescriptor,
    Service,
    SigningAlgorithm,
    SigningVersion,
)
from aws_auth_signers.exceptions import EncodingError, ParseError
from aws_auth_signers.types import UTC


class TestRequestDescriptor:
    def test_defaults(self):
        request = RequestDescriptor()

        assert request.method is HttpRequestMethod.GET
        assert request.path == ""
        assert request.query == ""
        assert request.host is None
        assert request.headers == {}
        assert request.region is Region.US_EAST_1
        assert request.service is Service.S3
        assert request.mode is Mode.NORMAL
        assert request.version is SigningVersion.FOUR
        assert request.algorithm is SigningAlgorithm.AWS4_HMAC_SHA256
        assert request.chunk_size == 0
        assert request.seed is True

    @freeze_time("2013-05-24 00:00:00")
    def test_default_date_is_now(self):
        request = RequestDescriptor()

        assert request.date.strftime("%Y%m%dT%H%M%SZ") == "20130524T000000Z"

    def test_from_url(self):
        request = RequestDescriptor.from_url(
            "https://examplebucket.s3.amazonaws.com/my%20photo.jpg?versionId=abc%2B1"
        )

        assert request.path == "/my photo.jpg"
        assert request.query == "versionId=abc%2B1"
        assert request.host == "examplebucket.s3.amazonaws.com"

    def test_from_url_without_path(self):
        request = RequestDescriptor.from_url(
            "https://examplebucket.s3.amazonaws.com?max-keys=2&prefix=J"
        )

        assert request.path == ""
        assert request.query == "max-keys=2&prefix=J"

    def test_from_url_invalid_path(self):
        with pytest.raises(EncodingError):
            RequestDescriptor.from_url("https://example.com/%ff")

    def test_setters_chain(self):
        request = RequestDescriptor()

        assert (
            request.set_method("put")
            .set_path("/key")
            .set_query("uploads")
            .set_host("example.com")
            .set_region("eu-west-1")
            .set_service(Service.STS)
            .set_mode(Mode.CHUNKED)
            .set_chunk_size(65536)
            .set_version(SigningVersion.TWO)
            .set_algorithm("AWS4-HMAC-SHA256-PAYLOAD")
            .set_seed(False)
            .set_payload_hash("abc")
            .set_access_key_id("AKID")
            .set_secret_access_key("SECRET")
            is request
        )
        assert request.method is HttpRequestMethod.PUT
        assert request.region is Region.EU_WEST_1
        assert request.service is Service.STS
        assert request.algorithm is SigningAlgorithm.AWS4_HMAC_SHA256_PAYLOAD

    def test_unknown_region(self):
        with pytest.raises(ParseError):
            RequestDescriptor().set_region("mars-north-1")

    def test_unknown_service(self):
        with pytest.raises(ParseError):
            RequestDescriptor().set_service("lambda")

    def test_add_header_replaces_case_insensitive(self):
        request = (
            RequestDescriptor()
            .add_header("Host", "a.example.com")
            .add_header("HOST", "b.example.com")
        )

        assert request.headers == {"HOST": "b.example.com"}

    @pytest.mark.parametrize(
        "date",
        [
            "20130524T000000Z",
            datetime(2013, 5, 24),
            datetime(2013, 5, 24, tzinfo=UTC),
            datetime(2013, 5, 24, 2, tzinfo=timezone(timedelta(hours=2))),
        ],
    )
    def test_set_date(self, date):
        request = RequestDescriptor().set_date(date)

        assert request.date == datetime(2013, 5, 24, tzinfo=UTC)

    def test_set_date_malformed(self):
        with pytest.raises(ParseError):
            RequestDescriptor().set_date("yesterday")

    def test_set_identity(self):
        identity = AWSCredentialIdentity(
            access_key_id="AKID123456", secret_access_key="EXAMPLE1234SECRET"
        )
        request = RequestDescriptor().set_identity(identity)

        assert request.access_key_id == "AKID123456"
        assert request.secret_access_key == "EXAMPLE1234SECRET"

    def test_set_identity_expired(self):
        identity = AWSCredentialIdentity(
            access_key_id="AKID123456",
            secret_access_key="EXAMPLE1234SECRET",
            expiration=datetime(2000, 1, 1, tzinfo=UTC),
        )

        with pytest.raises(ValueError):
            RequestDescriptor().set_identity(identity)

    def test_set_identity_wrong_type(self):
        with pytest.raises(ValueError):
            RequestDescriptor().set_identity(("AKID123456", "EXAMPLE1234SECRET"))

    def test_copy_is_independent(self):
        request = RequestDescriptor().add_header("Host", "example.com")
        clone = request.copy().add_header("Range", "bytes=0-9")

        assert request.headers == {"Host": "example.com"}
        assert clone.headers == {"Host": "example.com", "Range": "bytes=0-9"}
