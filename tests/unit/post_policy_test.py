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

import base64
import json
from datetime import datetime, timedelta, timezone
from unittest import TestCase

from ossaddons.error import InvalidArgumentError
from ossaddons.post_policy import (ContentLengthRange, PolicyCondition,
                                   PostPolicy, escape_json_string)
from ossaddons.time import from_iso8601utc

EXPIRES_AT = datetime(2017, 1, 23, 4, 5, 6, 0, timezone.utc)


class PostPolicyTest(TestCase):
    def test_post_policy(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_content_length_range(100, 1000)
        policy.set_bucket_name("test-bucket")
        policy.set_key('"test-object-name"')

        data = json.loads(policy.serialize())
        self.assertEqual(from_iso8601utc(data["expiration"]), EXPIRES_AT)
        self.assertEqual(
            data["conditions"],
            [
                ["content-length-range", 100, 1000],
                ["eq", "$bucket", "test-bucket"],
                ["eq", "$key", '"test-object-name"'],
            ],
        )
        self.assertEqual(
            policy.serialize(),
            rb'{"expiration":"2017-01-23T04:05:06.000Z","conditions":['
            rb'["content-length-range",100,1000],'
            rb'["eq","$bucket","test-bucket"],'
            rb'["eq","$key","\"test-object-name\""]]}',
        )
        self.assertEqual(
            policy.form_data,
            {"bucket": "test-bucket", "key": '"test-object-name"'},
        )

    def test_empty_policy(self):
        policy = PostPolicy()
        self.assertEqual(
            policy.serialize(),
            b'{"expiration":"0001-01-01T00:00:00.000Z","conditions":[]}',
        )
        self.assertIsNone(policy.expiration)
        self.assertEqual(policy.form_data, {})
        self.assertEqual(policy.conditions, ())

    def test_base64_and_str(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_key("photos/€.png")
        self.assertEqual(
            policy.base64(),
            base64.b64encode(policy.serialize()).decode(),
        )
        self.assertEqual(base64.b64decode(policy.base64()),
                         policy.serialize())
        self.assertEqual(str(policy), policy.serialize().decode("utf-8"))
        self.assertNotIn("\n", policy.base64())

    def test_serialize_does_not_mutate(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_bucket_name("test-bucket")
        first = policy.serialize()
        policy.base64()
        str(policy)
        self.assertEqual(policy.serialize(), first)
        self.assertEqual(len(policy.conditions), 1)

    def test_conditions_order(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_content_type("image/png")
        policy.set_key("a.png")
        policy.set_success_action_status("201")
        policy.set_bucket_name("b1")
        self.assertEqual(
            json.loads(policy.serialize())["conditions"],
            [
                ["eq", "$Content-Type", "image/png"],
                ["eq", "$key", "a.png"],
                ["eq", "$success_action_status", "201"],
                ["eq", "$bucket", "b1"],
            ],
        )
        self.assertEqual(
            policy.conditions[0],
            PolicyCondition("eq", "$Content-Type", "image/png"),
        )
        self.assertEqual(
            policy.form_data,
            {
                "Content-Type": "image/png",
                "key": "a.png",
                "success_action_status": "201",
                "bucket": "b1",
            },
        )

    def test_content_length_range_goes_first(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_bucket_name("test-bucket")
        policy.set_key("object")
        policy.set_content_length_range(1, 2)
        conditions = json.loads(policy.serialize())["conditions"]
        self.assertEqual(conditions[0], ["content-length-range", 1, 2])

    def test_content_length_range_values(self):
        for min_length, max_length in [
                (0, 1), (0, 0xFFFFFFFF), (5, 5), (1000, 9999999999),
        ]:
            policy = PostPolicy()
            policy.set_expiration(EXPIRES_AT)
            policy.set_content_length_range(min_length, max_length)
            conditions = json.loads(policy.serialize())["conditions"]
            self.assertEqual(
                conditions,
                [["content-length-range", min_length, max_length]],
            )

    def test_content_length_range_overwrite(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_content_length_range(1, 10)
        policy.set_content_length_range(20, 30)
        self.assertEqual(policy.content_length_range, ContentLengthRange(20, 30))
        self.assertEqual(
            json.loads(policy.serialize())["conditions"],
            [["content-length-range", 20, 30]],
        )

    def test_zero_content_length_range_not_emitted(self):
        # Explicit (0, 0) range is indistinguishable from unset range.
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_content_length_range(0, 0)
        self.assertFalse(policy.content_length_range.is_set)
        self.assertEqual(json.loads(policy.serialize())["conditions"], [])

        policy.set_content_length_range(1, 10)
        policy.set_content_length_range(0, 0)
        self.assertEqual(json.loads(policy.serialize())["conditions"], [])

    def test_invalid_content_length_range(self):
        policy = PostPolicy()
        for min_length, max_length in [
                (10, 1), (-1, 10), (-10, -1), (1.5, 10), (True, 10), (0, "1"),
        ]:
            with self.assertRaises(InvalidArgumentError):
                policy.set_content_length_range(min_length, max_length)
        self.assertEqual(policy.content_length_range, ContentLengthRange())

    def test_content_length_range_messages(self):
        policy = PostPolicy()
        with self.assertRaisesRegex(InvalidArgumentError, "larger"):
            policy.set_content_length_range(2, 1)
        with self.assertRaisesRegex(InvalidArgumentError, "minimum"):
            policy.set_content_length_range(-2, 1)

    def test_invalid_key(self):
        policy = PostPolicy()
        policy.set_key("first")
        for key in ["", "   ", "\t\n", None]:
            with self.assertRaises(InvalidArgumentError):
                policy.set_key(key)
        self.assertEqual(policy.form_data, {"key": "first"})
        self.assertEqual(len(policy.conditions), 1)

    def test_invalid_string_setters(self):
        policy = PostPolicy()
        for setter in [
                policy.set_key_startswith,
                policy.set_bucket_name,
                policy.set_content_type,
                policy.set_success_action_status,
                policy.set_success_action_redirect,
        ]:
            for value in ["", "  "]:
                with self.assertRaises(InvalidArgumentError):
                    setter(value)
        with self.assertRaises(InvalidArgumentError):
            policy.set_user_metadata("", "value")
        with self.assertRaises(InvalidArgumentError):
            policy.set_user_metadata("name", " ")
        self.assertEqual(policy.form_data, {})
        self.assertEqual(policy.conditions, ())

    def test_invalid_argument_error_is_value_error(self):
        policy = PostPolicy()
        with self.assertRaises(ValueError):
            policy.set_bucket_name("")
        try:
            policy.set_bucket_name("")
        except InvalidArgumentError as exc:
            self.assertEqual(exc.message, "bucket name is empty")

    def test_key_startswith_overwrites_key(self):
        policy = PostPolicy()
        policy.set_key("exact")
        policy.set_key_startswith("prefix/")
        self.assertEqual(policy.form_data["key"], "prefix/")
        self.assertEqual(policy.key, "prefix/")
        self.assertEqual(
            [condition.match_type for condition in policy.conditions],
            ["eq", "starts-with"],
        )

        policy.set_key("exact-again")
        self.assertEqual(policy.form_data["key"], "exact-again")

    def test_user_metadata(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        policy.set_user_metadata("owner", "alice")
        policy.set_user_metadata("x-oss-meta-team", "storage")
        self.assertEqual(
            policy.form_data,
            {"x-oss-meta-owner": "alice", "x-oss-meta-team": "storage"},
        )
        self.assertEqual(
            json.loads(policy.serialize())["conditions"],
            [
                ["eq", "$x-oss-meta-owner", "alice"],
                ["eq", "$x-oss-meta-team", "storage"],
            ],
        )

    def test_success_action_redirect(self):
        policy = PostPolicy()
        policy.set_success_action_redirect("https://example.com/done?a=1&b=2")
        self.assertEqual(
            policy.form_data["success_action_redirect"],
            "https://example.com/done?a=1&b=2",
        )
        self.assertIn(
            b'["eq","$success_action_redirect",'
            b'"https://example.com/done?a=1&b=2"]',
            policy.serialize(),
        )

    def test_add_condition_with_empty_fields(self):
        policy = PostPolicy()
        for condition in [
                PolicyCondition("", "$key", "value"),
                PolicyCondition("eq", "", "value"),
                PolicyCondition("eq", "$key", ""),
        ]:
            with self.assertRaises(InvalidArgumentError):
                # pylint: disable=protected-access
                policy._add_condition(condition)
        self.assertEqual(policy.conditions, ())

    def test_form_data_is_copy(self):
        policy = PostPolicy()
        policy.set_bucket_name("test-bucket")
        form_data = policy.form_data
        form_data["bucket"] = "other"
        form_data["policy"] = "xyz"
        self.assertEqual(policy.form_data, {"bucket": "test-bucket"})


class ExpirationTest(TestCase):
    def test_zero_expiration(self):
        policy = PostPolicy()
        for value in [
                datetime.min,
                datetime.min.replace(tzinfo=timezone.utc),
                None,
                "2017-01-23T04:05:06.000Z",
                1485144306,
        ]:
            with self.assertRaises(InvalidArgumentError):
                policy.set_expiration(value)
        self.assertIsNone(policy.expiration)

    def test_expiration_round_trip(self):
        policy = PostPolicy()
        value = datetime(2030, 12, 31, 23, 59, 59, 123456, timezone.utc)
        policy.set_expiration(value)
        data = json.loads(policy.serialize())
        self.assertEqual(data["expiration"], "2030-12-31T23:59:59.123Z")
        self.assertEqual(
            from_iso8601utc(data["expiration"]),
            value.replace(microsecond=123000),
        )

    def test_naive_expiration_is_utc(self):
        policy = PostPolicy()
        policy.set_expiration(datetime(2017, 1, 23, 4, 5, 6))
        self.assertEqual(policy.expiration, EXPIRES_AT)

    def test_expiration_converted_to_utc(self):
        policy = PostPolicy()
        policy.set_expiration(
            datetime(2017, 1, 23, 12, 5, 6,
                     tzinfo=timezone(timedelta(hours=8))),
        )
        self.assertEqual(policy.expiration, EXPIRES_AT)
        self.assertIn(b'"expiration":"2017-01-23T04:05:06.000Z"',
                      policy.serialize())

    def test_expiration_overwrite(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        later = EXPIRES_AT + timedelta(days=1)
        policy.set_expiration(later)
        self.assertEqual(policy.expiration, later)

    def test_unrepresentable_expiration(self):
        policy = PostPolicy()
        with self.assertRaises(InvalidArgumentError):
            policy.set_expiration(
                datetime.min.replace(tzinfo=timezone(timedelta(hours=8))),
            )


class EscapeJsonStringTest(TestCase):
    def test_json_round_trip(self):
        for value in [
                'a"b\\c\nd€',
                "tab\there\rcr",
                "中文/\U0001f600.txt",
                "\x00\x01\x1f\x7f",
                "",
        ]:
            self.assertEqual(
                json.loads('"' + escape_json_string(value) + '"'),
                value,
            )

    def test_escapes(self):
        self.assertEqual(escape_json_string('"'), '\\"')
        self.assertEqual(escape_json_string("\\"), "\\\\")
        self.assertEqual(escape_json_string("\n\r\t"), "\\n\\r\\t")
        self.assertEqual(escape_json_string("\x01"), "\\u0001")
        self.assertEqual(escape_json_string("\x1b"), "\\u001b")
        self.assertEqual(escape_json_string("\x08\x0c"), "\\u0008\\u000c")

    def test_no_html_escape(self):
        value = "<script>&  €\x7f"
        self.assertEqual(escape_json_string(value), value)

    def test_invalid_utf8(self):
        self.assertEqual(escape_json_string(b"a\xffb"), "a\\ufffdb")
        self.assertEqual(escape_json_string(b"\xc3\x28"), "\\ufffd(")
        self.assertEqual(escape_json_string(b"\xe2\x82\xac"), "€")
        self.assertEqual(escape_json_string("x\udcffy"), "x\\ufffdy")

    def test_escaped_value_in_policy(self):
        policy = PostPolicy()
        policy.set_expiration(EXPIRES_AT)
        key = 'a"b\\c\nd€<&>'
        policy.set_key(key)
        document = policy.serialize()
        self.assertIn('<&>'.encode(), document)
        self.assertIn('€'.encode(), document)
        self.assertEqual(json.loads(document)["conditions"],
                         [["eq", "$key", key]])
        self.assertEqual(policy.form_data["key"], key)
