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

"""Credential providers."""

from __future__ import annotations

import configparser
import os
from abc import ABCMeta, abstractmethod
from pathlib import Path

from .credentials import Credentials


def _user_home_dir() -> str:
    """Return current user home folder."""
    return (
        os.environ.get("HOME") or
        os.environ.get("UserProfile") or
        str(Path.home())
    )


class Provider(metaclass=ABCMeta):  # pylint: disable=too-few-public-methods
    """Credential retriever."""

    @abstractmethod
    def retrieve(self) -> Credentials:
        """Retrieve credentials and its expiry if available."""


class ChainedProvider(Provider):
    """Chained credential provider."""

    def __init__(self, providers: list[Provider]):
        self._providers = providers
        self._provider: Provider | None = None
        self._credentials: Credentials | None = None

    def retrieve(self) -> Credentials:
        """Retrieve credentials from one of available provider."""
        if self._credentials and not self._credentials.is_expired():
            return self._credentials

        if self._provider:
            try:
                self._credentials = self._provider.retrieve()
                return self._credentials
            except ValueError:
                # Ignore this error and iterate other providers.
                pass

        for provider in self._providers:
            try:
                self._credentials = provider.retrieve()
                self._provider = provider
                return self._credentials
            except ValueError:
                # Ignore this error and iterate other providers.
                pass

        raise ValueError("All providers fail to fetch credentials")


class EnvOSSProvider(Provider):
    """Credential provider from OSS environment variables."""

    def retrieve(self) -> Credentials:
        """Retrieve credentials."""
        return Credentials(
            access_key=(
                os.environ.get("OSS_ACCESS_KEY_ID") or
                os.environ.get("ALIBABA_CLOUD_ACCESS_KEY_ID") or
                ""
            ),
            secret_key=(
                os.environ.get("OSS_ACCESS_KEY_SECRET") or
                os.environ.get("ALIBABA_CLOUD_ACCESS_KEY_SECRET") or
                ""
            ),
            session_token=(
                os.environ.get("OSS_SESSION_TOKEN") or
                os.environ.get("ALIBABA_CLOUD_SECURITY_TOKEN")
            ),
        )


class OssutilConfigProvider(Provider):
    """Credential provider from ossutil configuration file."""

    def __init__(
            self,
            filename: str | None = None,
            section: str | None = None,
    ):
        self._filename = (
            filename or
            os.environ.get("OSSUTIL_CONFIG_FILE") or
            os.path.join(_user_home_dir(), ".ossutilconfig")
        )
        self._section = section or "Credentials"

    def retrieve(self) -> Credentials:
        """Retrieve credentials from ossutil configuration file."""
        parser = configparser.ConfigParser()
        try:
            with open(self._filename, encoding="utf-8") as conf_file:
                parser.read_file(conf_file)
        except (IOError, OSError, configparser.Error) as exc:
            raise ValueError(
                f"error in reading file {self._filename}",
            ) from exc

        access_key = parser.get(self._section, "accessKeyID", fallback=None)
        secret_key = parser.get(
            self._section, "accessKeySecret", fallback=None,
        )
        session_token = parser.get(self._section, "stsToken", fallback=None)

        if not access_key:
            raise ValueError(
                f"access key does not exist in section {self._section} of "
                f"ossutil configuration file {self._filename}",
            )
        if not secret_key:
            raise ValueError(
                f"secret key does not exist in section {self._section} of "
                f"ossutil configuration file {self._filename}",
            )

        return Credentials(access_key, secret_key, session_token or None)


class StaticProvider(Provider):
    """Fixed credential provider."""

    def __init__(
            self,
            access_key: str,
            secret_key: str,
            session_token: str | None = None,
    ):
        self._credentials = Credentials(access_key, secret_key, session_token)

    def retrieve(self) -> Credentials:
        """Return passed credentials."""
        return self._credentials
