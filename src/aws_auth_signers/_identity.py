"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from dataclasses import dataclass
from datetime import datetime

from .types import UTC


@dataclass(kw_only=True)
class AWSCredentialIdentity:
    """Access key pair used to sign requests.

    The session token isn't part of any signature; callers that use
    temporary credentials send it in the ``X-Amz-Security-Token`` header
    and should add that header before signing.
    """

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None
    expiration: datetime | None = None

    @property
    def is_expired(self) -> bool:
        """Whether the identity is expired."""
        if self.expiration is None:
            return False
        return self.expiration < datetime.now(UTC)
