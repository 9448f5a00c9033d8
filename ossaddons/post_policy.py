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
ossaddons.post_policy
~~~~~~~~~~~~~~~~~~~~~

This module contains :class:`PostPolicy <PostPolicy>` implementation.

:copyright: (c) 2017 by OSS Addons Authors.
:license: Apache 2.0, see LICENSE for more details.

"""

from __future__ import absolute_import, annotations

import base64
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from . import time
from .error import InvalidArgumentError
from .helpers import check_non_empty_string

EQ = "eq"
STARTS_WITH = "starts-with"
_USER_METADATA_PREFIX = "x-oss-meta-"


def escape_json_string(value: str | bytes) -> str:
    """
    JSON-escape a string for embedding into post policy document.

    Unlike :func:`json.dumps`, this does not escape non-ASCII characters nor
    characters like '<', '>', '&', U+2028 and U+2029; OSS verifies signature
    over the exact policy bytes. Invalid UTF-8 bytes are replaced by escaped
    U+FFFD, one per byte.
    """
    escapes = {
        "\\": "\\\\",
        '"': '\\"',
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }

    if isinstance(value, bytes):
        value = value.decode("utf-8", "surrogateescape")

    result = []
    for char in value:
        code = ord(char)
        if char in escapes:
            result.append(escapes[char])
        elif code < 0x20:
            result.append(f"\\u{code:04x}")
        elif 0xD800 <= code <= 0xDFFF:
            # Lone surrogate i.e. invalid UTF-8 byte sequence.
            result.append("\\ufffd")
        else:
            result.append(char)
    return "".join(result)


@dataclass(frozen=True)
class PolicyCondition:
    """
    Single policy condition, for example

        PolicyCondition("eq", "$Content-Type", "image/png")
    """

    match_type: str
    condition: str
    value: str

    def to_json(self) -> str:
        """Get JSON array of this condition."""
        return (
            f'["{self.match_type}",'
            f'"{escape_json_string(self.condition)}",'
            f'"{escape_json_string(self.value)}"]'
        )


@dataclass(frozen=True)
class ContentLengthRange:
    """Minimum and maximum allowable size of the uploaded content."""

    min: int = 0
    max: int = 0

    @property
    def is_set(self) -> bool:
        """Check whether range is set i.e. any of the limits is non-zero."""
        return self.min != 0 or self.max != 0

    def to_json(self) -> str:
        """Get JSON array of this range."""
        return f'["content-length-range",{self.min},{self.max}]'


# Policy explanation:
# https://help.aliyun.com/document_detail/31988.html
class PostPolicy:
    """
    A :class:`PostPolicy <PostPolicy>` object for constructing
    OSS POST policy JSON string.
    """

    def __init__(self):
        self._expiration: Optional[datetime] = None
        self._conditions: list[PolicyCondition] = []
        self._content_length_range = ContentLengthRange()
        self._form_data: dict[str, str] = {}

    def set_expiration(self, expiration: datetime):
        """
        Set expiration time of the policy.

        :param expiration: :class:`datetime.datetime`; naive value is
            treated as UTC.
        """
        if not isinstance(expiration, datetime):
            raise InvalidArgumentError("expiration must be datetime type")
        try:
            expiration = time.to_utc(expiration)
        except OverflowError as exc:
            raise InvalidArgumentError(
                "expiration cannot be represented in UTC",
            ) from exc
        if time.is_zero(expiration):
            raise InvalidArgumentError("no expiry time set")
        self._expiration = expiration

    def set_key(self, key: str):
        """
        Set key policy condition.

        :param key: object name.
        """
        check_non_empty_string(key, "object name is empty")
        self._add_condition(PolicyCondition(EQ, "$key", key))
        self._form_data["key"] = key

    def set_key_startswith(self, key_startswith: str):
        """
        Set key starts-with policy condition.

        :param key_startswith: object name prefix.
        """
        check_non_empty_string(key_startswith, "object prefix is empty")
        self._add_condition(
            PolicyCondition(STARTS_WITH, "$key", key_startswith),
        )
        self._form_data["key"] = key_startswith

    def set_bucket_name(self, bucket_name: str):
        """
        Set bucket name policy condition.

        :param bucket_name: bucket name.
        """
        check_non_empty_string(bucket_name, "bucket name is empty")
        self._add_condition(PolicyCondition(EQ, "$bucket", bucket_name))
        self._form_data["bucket"] = bucket_name

    def set_content_type(self, content_type: str):
        """
        Set content-type policy condition.

        :param content_type: content type of the object.
        """
        check_non_empty_string(content_type, "no content type specified")
        self._add_condition(
            PolicyCondition(EQ, "$Content-Type", content_type),
        )
        self._form_data["Content-Type"] = content_type

    def set_content_length_range(self, min_length: int, max_length: int):
        """
        Set content length range policy condition. Previously set range is
        replaced. Note that range (0, 0) is same as unset.

        :param min_length: minimum length limit for content size.
        :param max_length: maximum length limit for content size.
        """
        for limit in (min_length, max_length):
            if isinstance(limit, bool) or not isinstance(limit, int):
                raise InvalidArgumentError("limit must be int type")
        if min_length > max_length:
            raise InvalidArgumentError(
                "minimum limit is larger than maximum limit",
            )
        if min_length < 0:
            raise InvalidArgumentError("minimum limit cannot be negative")
        if max_length < 0:
            raise InvalidArgumentError("maximum limit cannot be negative")
        self._content_length_range = ContentLengthRange(min_length, max_length)

    def set_success_action_status(self, status: str):
        """
        Set success_action_status policy condition.

        :param status: HTTP status code returned on success, e.g. "201".
        """
        check_non_empty_string(status, "status is empty")
        self._add_condition(
            PolicyCondition(EQ, "$success_action_status", status),
        )
        self._form_data["success_action_status"] = status

    def set_success_action_redirect(self, url: str):
        """
        Set success_action_redirect policy condition.

        :param url: URL the client is redirected to on success.
        """
        check_non_empty_string(url, "redirect URL is empty")
        self._add_condition(
            PolicyCondition(EQ, "$success_action_redirect", url),
        )
        self._form_data["success_action_redirect"] = url

    def set_user_metadata(self, name: str, value: str):
        """
        Set x-oss-meta-* policy condition.

        :param name: metadata name with or without x-oss-meta- prefix.
        :param value: metadata value.
        """
        check_non_empty_string(name, "metadata name is empty")
        check_non_empty_string(value, "metadata value is empty")
        if not name.lower().startswith(_USER_METADATA_PREFIX):
            name = _USER_METADATA_PREFIX + name
        self._add_condition(PolicyCondition(EQ, "$" + name, value))
        self._form_data[name] = value

    def _add_condition(self, condition: PolicyCondition):
        """Validate and append new policy condition."""
        if (
                not condition.match_type or
                not condition.condition or
                not condition.value
        ):
            raise InvalidArgumentError("policy fields are empty")
        self._conditions.append(condition)

    @property
    def expiration(self) -> Optional[datetime]:
        """Get expiration time in UTC."""
        return (
            self._expiration.replace(tzinfo=timezone.utc)
            if self._expiration else None
        )

    @property
    def conditions(self) -> tuple[PolicyCondition, ...]:
        """Get policy conditions in the order they were set."""
        return tuple(self._conditions)

    @property
    def content_length_range(self) -> ContentLengthRange:
        """Get content length range."""
        return self._content_length_range

    @property
    def form_data(self) -> dict[str, str]:
        """Get copy of form-data collected from policy conditions."""
        return dict(self._form_data)

    @property
    def bucket_name(self) -> Optional[str]:
        """Get bucket name."""
        return self._form_data.get("bucket")

    @property
    def key(self) -> Optional[str]:
        """Get object name or object name prefix."""
        return self._form_data.get("key")

    def serialize(self) -> bytes:
        """Marshal policy into canonical JSON bytes."""
        conditions = []
        # content-length-range always goes first.
        if self._content_length_range.is_set:
            conditions.append(self._content_length_range.to_json())
        conditions.extend(
            condition.to_json() for condition in self._conditions
        )
        expiration = time.to_iso8601utc(self._expiration or time.ZERO_TIME)
        return (
            f'{{"expiration":"{expiration}",'
            f'"conditions":[{",".join(conditions)}]}}'
        ).encode("utf-8")

    def base64(self) -> str:
        """Encode policy JSON into base64."""
        return base64.b64encode(self.serialize()).decode("utf-8")

    def __str__(self) -> str:
        return self.serialize().decode("utf-8")
