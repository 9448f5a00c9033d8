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
ossaddons.error
~~~~~~~~~~~~~~~~~~~

This module provides custom exception classes for OSS Addons library.

:copyright: (c) 2017 by OSS Addons Authors.
:license: Apache 2.0, see LICENSE for more details.

"""

from __future__ import absolute_import, annotations


class OssAddonsException(Exception):
    """Base OSS Addons exception."""


class InvalidArgumentError(OssAddonsException, ValueError):
    """
    Raised to indicate that an argument passed to a post policy setter
    violates its precondition.
    """

    def __init__(self, message: str):
        self._message = message
        super().__init__(message)

    @property
    def message(self) -> str:
        """Get error message."""
        return self._message

    def __reduce__(self):
        return type(self), (self._message,)


class PolicyPreconditionError(OssAddonsException):
    """
    Raised to indicate that a post policy lacks expiration, object key or
    bucket name required to presign it.
    """


class InvalidEndpointError(OssAddonsException, ValueError):
    """Raised to indicate that the configured endpoint is not usable."""
