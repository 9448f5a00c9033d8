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
ossaddons.api
~~~~~~~~~~~~~

This module implements presigned POST policy for OSS.

:copyright: (c) 2017 by OSS Addons Authors.
:license: Apache 2.0, see LICENSE for more details.

"""

from __future__ import absolute_import, annotations

from dataclasses import dataclass
from typing import Optional, TextIO

from typing_extensions import Protocol

from .credentials import Provider, StaticProvider
from .error import PolicyPreconditionError
from .helpers import build_post_url, parse_endpoint
from .post_policy import PostPolicy
from .signer import post_presign_v1


class OssConfig(Protocol):  # pylint: disable=too-few-public-methods
    """Endpoint and credentials configuration of OSS client."""

    endpoint: str
    access_key_id: str
    access_key_secret: str
    is_cname: bool


@dataclass(frozen=True)
class Config:
    """Plain :class:`OssConfig` implementation."""

    endpoint: str
    access_key_id: str
    access_key_secret: str
    is_cname: bool = False
    security_token: Optional[str] = None


def presigned_post_policy(
        config: OssConfig,
        policy: PostPolicy,
) -> tuple[str, dict[str, str]]:
    """
    Get POST URL and form-data to upload an object with given policy.

    Args:
        config (OssConfig):
            Endpoint and credentials. Optional ``security_token`` attribute
            is sent as ``x-oss-security-token`` form field.

        policy (PostPolicy):
            Post policy having expiration, object key and bucket name set.

    Returns:
        tuple[str, dict[str, str]]:
            Target URL and form-data including ``policy``,
            ``OSSAccessKeyId`` and ``signature``.

    Example:
        >>> policy = PostPolicy()
        >>> policy.set_expiration(datetime.utcnow() + timedelta(days=10))
        >>> policy.set_bucket_name("my-bucket")
        >>> policy.set_key_startswith("my/object/prefix/")
        >>> url, form_data = presigned_post_policy(config, policy)
    """
    if not isinstance(policy, PostPolicy):
        raise ValueError("policy must be PostPolicy type")
    if policy.expiration is None:
        raise PolicyPreconditionError("expiration time must be specified")

    form_data = policy.form_data
    if "key" not in form_data:
        raise PolicyPreconditionError("object key must be specified")
    if "bucket" not in form_data:
        raise PolicyPreconditionError("bucket name must be specified")

    url = build_post_url(
        parse_endpoint(config.endpoint),
        form_data["bucket"],
        config.is_cname,
    )

    policy_base64 = policy.base64()
    form_data["policy"] = policy_base64
    form_data["OSSAccessKeyId"] = config.access_key_id
    form_data["signature"] = post_presign_v1(
        policy_base64, config.access_key_secret,
    )
    security_token = getattr(config, "security_token", None)
    if security_token:
        form_data["x-oss-security-token"] = security_token
    return url, form_data


class Client:
    """OSS client to presign POST policy based uploads."""
    _endpoint: str
    _is_cname: bool
    _provider: Optional[Provider]
    _trace_stream: Optional[TextIO]

    def __init__(
            self,
            endpoint: str,
            access_key: Optional[str] = None,
            secret_key: Optional[str] = None,
            session_token: Optional[str] = None,
            is_cname: bool = False,
            credentials: Optional[Provider] = None,
    ):
        """
        Initializes a new OSS client object.

        Args:
            endpoint (str):
                OSS endpoint, e.g. ``oss-cn-hangzhou.aliyuncs.com`` or
                ``https://oss-cn-hangzhou.aliyuncs.com``.

            access_key (Optional[str], default=None):
                Access key ID of your account.

            secret_key (Optional[str], default=None):
                Access key secret of your account.

            session_token (Optional[str], default=None):
                STS security token of your account.

            is_cname (bool, default=False):
                Flag to indicate endpoint is a custom domain bound to the
                bucket.

            credentials (Optional[Provider], default=None):
                Credentials provider of your account.

        Example:
            >>> client = Client(
            ...     endpoint="oss-cn-hangzhou.aliyuncs.com",
            ...     access_key="ACCESS-KEY-ID",
            ...     secret_key="ACCESS-KEY-SECRET",
            ... )
        """
        # Fail early on unusable endpoint.
        parse_endpoint(endpoint)
        self._endpoint = endpoint
        self._is_cname = is_cname
        self._trace_stream = None
        if access_key:
            if secret_key is None:
                raise ValueError("secret key must be provided with access key")
            credentials = StaticProvider(access_key, secret_key, session_token)
        self._provider = credentials

    def trace_on(self, stream: TextIO):
        """
        Enable presign trace.

        Args:
            stream (TextIO):
                Stream for writing presign tracing.

        Example:
            >>> client.trace_on(sys.stdout)
        """
        if not stream:
            raise ValueError('Input stream for trace output is invalid.')
        # Save new output stream.
        self._trace_stream = stream

    def trace_off(self):
        """Disable presign trace."""
        self._trace_stream = None

    def presigned_post_policy(
            self,
            policy: PostPolicy,
    ) -> tuple[str, dict[str, str]]:
        """
        Get POST URL and form-data for a PostPolicy to upload an object.

        Args:
            policy (PostPolicy):
                Post policy that defines conditions for the upload.

        Returns:
            tuple[str, dict[str, str]]:
                Target URL and form-data required for the POST request.

        Example:
            >>> policy = PostPolicy()
            >>> policy.set_expiration(datetime.utcnow() + timedelta(days=10))
            >>> policy.set_bucket_name("my-bucket")
            >>> policy.set_key_startswith("my/object/prefix/")
            >>> policy.set_content_length_range(1*1024*1024, 10*1024*1024)
            >>> url, form_data = client.presigned_post_policy(policy)
        """
        if not self._provider:
            raise ValueError(
                "anonymous access does not require presigned post form-data",
            )
        creds = self._provider.retrieve()
        url, form_data = presigned_post_policy(
            Config(
                endpoint=self._endpoint,
                access_key_id=creds.access_key,
                access_key_secret=creds.secret_key,
                is_cname=self._is_cname,
                security_token=creds.session_token,
            ),
            policy,
        )

        if self._trace_stream:
            self._trace_stream.write("---------START-PRESIGN---------\n")
            self._trace_stream.write(f"POST {url}\n")
            self._trace_stream.write(f"Policy: {policy}\n")
            for key, value in form_data.items():
                if key == "signature":
                    value = "*REDACTED*"
                self._trace_stream.write(f"{key}: {value}\n")
            self._trace_stream.write("---------END-PRESIGN---------\n")

        return url, form_data
