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


"""
ossaddons.signer
~~~~~~~~~~~~~~~~

This module implements signature version '1' of OSS POST policy.

:copyright: (c) 2017 by OSS Addons Authors.
:license: Apache 2.0, see LICENSE for more details.

"""

from __future__ import absolute_import, annotations

import base64
import hashlib
import hmac


def _hmac_hash(key: bytes, data: bytes) -> bytes:
    """Return HMacSHA1 digest of given key and data."""
    return hmac.new(key, data, hashlib.sha1).digest()


def post_presign_v1(policy_base64: str, secret_key: str) -> str:
    """Do signature V1 of given base64 encoded POST policy."""
    return base64.b64encode(
        _hmac_hash(secret_key.encode(), policy_base64.encode()),
    ).decode()
