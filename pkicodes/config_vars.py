# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Dataclasses for configuration variables used by the code lookups."""

from abc import ABC
from dataclasses import dataclass, fields


@dataclass
class ConfigVal(ABC):
    """Base class for configuration values."""

    def to_dict(self) -> dict:
        """Convert the configuration to a dictionary."""
        out = {}
        for x in fields(self):
            out[x.name] = getattr(self, x.name)
        return out


@dataclass
class LookupConfig(ConfigVal):
    """Configuration for the name and value lookups.

    Attributes:
        case_insensitive: If names may differ in case from the member name. Defaults to `True`.
        allow_native_names: If the certificate services constant names (e.g. `CR_DISP_ISSUED`)
        are accepted as aliases. Defaults to `True`.
        log_unrecognized: If an unrecognized value is logged as a warning by the tolerant
        lookups. Defaults to `True`.

    """

    case_insensitive: bool = True
    allow_native_names: bool = True
    log_unrecognized: bool = True
