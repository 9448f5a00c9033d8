# -*- coding: utf-8 -*-
# OSS Addons Python Library for Aliyun OSS Compatible Cloud Storage,
# (C) 2017 OSS Addons Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Credential definitions to access OSS service."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..time import to_utc, utcnow


@dataclass(frozen=True)
class Credentials:
    """
    Represents access key ID, access key secret and STS security token.
    """

    access_key: str
    secret_key: str
    session_token: Optional[str] = None
    expiration: Optional[datetime] = None

    def __post_init__(self):
        if not self.access_key:
            raise ValueError("Access key must not be empty")

        if not self.secret_key:
            raise ValueError("Secret key must not be empty")

        if self.expiration and self.expiration.tzinfo:
            object.__setattr__(self, "expiration", to_utc(self.expiration))

    def is_expired(self) -> bool:
        """Check whether this credentials expired or not."""
        now = utcnow().replace(tzinfo=None)
        return (
            self.expiration < (now + timedelta(seconds=10))
            if self.expiration else False
        )
