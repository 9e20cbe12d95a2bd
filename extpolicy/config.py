# extpolicy/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Resolver settings.

Defaults reproduce the standard precedence behavior. Hosts that store the
extension kind overrides under a different setting name can set
EXTPOLICY_CONFIG_KEY or pass their own ResolverSettings.
"""

import os
from dataclasses import dataclass, field
from typing import Any

from extpolicy.core.types import ALL_LOCALITIES, LocalityList, TrustRequirement

CONFIGURED_EXTENSION_KIND_KEY = "remote.extensionKind"
CONFIG_KEY_ENV = "EXTPOLICY_CONFIG_KEY"


@dataclass(frozen=True)
class ResolverSettings:
    configuration_key: str = CONFIGURED_EXTENSION_KIND_KEY
    # Used by deduction when nothing narrows the locality
    fallback_kind: LocalityList = field(default=ALL_LOCALITIES)
    # Used when no product or manifest value answers
    fallback_trust: Any = TrustRequirement.ON_START

    def __post_init__(self):
        if not isinstance(self.fallback_kind, LocalityList):
            object.__setattr__(self, "fallback_kind", LocalityList.coerce(self.fallback_kind))

    @classmethod
    def from_env(cls, environ=None) -> "ResolverSettings":
        """Build settings, taking the configuration key from the environment when set."""
        environ = os.environ if environ is None else environ
        return cls(configuration_key=environ.get(CONFIG_KEY_ENV) or CONFIGURED_EXTENSION_KIND_KEY)


DEFAULT_SETTINGS = ResolverSettings()

__all__ = ["ResolverSettings", "DEFAULT_SETTINGS", "CONFIGURED_EXTENSION_KIND_KEY", "CONFIG_KEY_ENV"]
