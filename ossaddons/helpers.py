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

"""Helper functions."""

from __future__ import absolute_import, annotations

import urllib.parse

from urllib3.exceptions import LocationParseError
from urllib3.util import Url, parse_url

from .error import InvalidArgumentError, InvalidEndpointError


def quote(resource: str, safe: str = "/") -> str:
    """
    Wrapper to urllib.parse.quote() replacing back to '~' for older python
    versions.
    """
    return urllib.parse.quote(resource, safe=safe).replace("%7E", "~")


def check_non_empty_string(value: str, message: str):
    """
    Check whether given string is not empty or whitespace only.
    Raise :exc:`InvalidArgumentError` with message otherwise.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(message)


def parse_endpoint(endpoint: str) -> Url:
    """
    Parse endpoint string. Endpoint without scheme is treated as plain HTTP
    like OSS SDKs do.
    """
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise InvalidEndpointError("endpoint must not be empty")

    endpoint = endpoint.strip()
    if "://" not in endpoint:
        endpoint = "http://" + endpoint

    try:
        url = parse_url(endpoint)
    except LocationParseError as exc:
        raise InvalidEndpointError(f"invalid endpoint {endpoint}") from exc

    if (url.scheme or "").lower() not in ["http", "https"]:
        raise InvalidEndpointError("scheme in endpoint must be http or https")

    if not url.host:
        raise InvalidEndpointError(f"host is missing in endpoint {endpoint}")

    if url.path and url.path != "/":
        raise InvalidEndpointError("path in endpoint is not allowed")

    if url.query:
        raise InvalidEndpointError("query in endpoint is not allowed")

    if url.fragment:
        raise InvalidEndpointError("fragment in endpoint is not allowed")

    if url.auth:
        raise InvalidEndpointError(
            "username or password in endpoint is not allowed",
        )

    scheme = url.scheme.lower()
    port = url.port
    if (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
        port = None

    return Url(scheme=scheme, host=url.host, port=port)


def build_post_url(
        endpoint: Url,
        bucket_name: str,
        is_cname: bool = False,
) -> str:
    """
    Build POST target URL. Bucket name goes into path unless endpoint is a
    CNAME already bound to the bucket.
    """
    path = None if is_cname else "/" + quote(bucket_name)
    return Url(
        scheme=endpoint.scheme,
        host=endpoint.host,
        port=endpoint.port,
        path=path,
    ).url
