# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Site accounts payload models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class TestClientCredentials:
    __test__ = False  # not a pytest class

    id: str = ""
    secret: str = field(default="", repr=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> TestClientCredentials:
        data = data or {}
        return cls(id=str(data.get("id") or ""), secret=str(data.get("secret") or ""))


@dataclass(frozen=True)
class SiteConfig:
    test_client_credentials: TestClientCredentials = field(default_factory=TestClientCredentials)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> SiteConfig:
        data = data or {}
        return cls(test_client_credentials=TestClientCredentials.from_mapping(data.get("testClientCredentials")))


@dataclass(frozen=True)
class Site:
    id: str
    config: SiteConfig = field(default_factory=SiteConfig)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Site:
        config = data.get("config")
        return cls(
            id=str(data.get("id") or ""),
            config=SiteConfig.from_mapping(config if isinstance(config, Mapping) else None),
        )

    def with_credentials(self, credentials: TestClientCredentials) -> Site:
        return replace(self, config=replace(self.config, test_client_credentials=credentials))
