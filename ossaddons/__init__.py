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
ossaddons - POST policy helpers for Aliyun OSS Compatible Cloud Storage

    >>> from datetime import datetime, timedelta
    >>> from ossaddons import Client, PostPolicy
    >>> client = Client(
    ...     "oss-cn-hangzhou.aliyuncs.com",
    ...     access_key="ACCESS-KEY-ID",
    ...     secret_key="ACCESS-KEY-SECRET",
    ... )
    >>> policy = PostPolicy()
    >>> policy.set_expiration(datetime.utcnow() + timedelta(days=1))
    >>> policy.set_bucket_name("my-bucket")
    >>> policy.set_key_startswith("uploads/")
    >>> url, form_data = client.presigned_post_policy(policy)

:copyright: (C) 2017 OSS Addons Authors.
:license: Apache 2.0, see LICENSE for more details.
"""

__title__ = "oss-addons"
__author__ = "OSS Addons Authors"
__version__ = "0.2.0"
__license__ = "Apache 2.0"
__copyright__ = "Copyright 2017 OSS Addons Authors"

# pylint: disable=unused-import,useless-import-alias
from .api import Client as Client
from .api import presigned_post_policy as presigned_post_policy
from .error import InvalidArgumentError as InvalidArgumentError
from .error import InvalidEndpointError as InvalidEndpointError
from .error import PolicyPreconditionError as PolicyPreconditionError
from .post_policy import PostPolicy as PostPolicy
