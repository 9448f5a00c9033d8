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

import sys
from datetime import datetime, timedelta

from ossaddons import Client, PostPolicy
from ossaddons.credentials import (ChainedProvider, EnvOSSProvider,
                                   OssutilConfigProvider)

client = Client(
    endpoint="oss-cn-hangzhou.aliyuncs.com",
    credentials=ChainedProvider([EnvOSSProvider(), OssutilConfigProvider()]),
)
client.trace_on(sys.stderr)

policy = PostPolicy()
policy.set_expiration(datetime.utcnow() + timedelta(days=10))
policy.set_bucket_name("my-bucket")
policy.set_key_startswith("my/object/prefix/")
policy.set_content_length_range(1*1024*1024, 10*1024*1024)
policy.set_success_action_status("201")

url, form_data = client.presigned_post_policy(policy)

args = " ".join([f"-F {k}={v}" for k, v in form_data.items()])
curl_cmd = f"curl -X POST {url} {args} -F file=@<FILE>"
print(curl_cmd)
