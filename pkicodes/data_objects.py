# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Dataclass objects returned by the code lookups."""

from dataclasses import dataclass, field
from typing import List, Optional

from pkicodes.certsrvenums import CertificateRequestType


@dataclass
class DecodedCode:
    """A raw code decoded against one code domain.

    Attributes:
        domain: The name of the code domain, e.g. "CAResponseDisposition".
        value: The raw integer code.
        name: The symbolic name, or `None` if the code is not recognized.
        description: The human-readable description, if recognized.
        native_name: The certificate services constant name, if recognized.

    """

    domain: str
    value: int
    name: Optional[str] = None
    description: Optional[str] = None
    native_name: Optional[str] = None

    @property
    def is_recognized(self) -> bool:
        """Whether the code matched a member of the domain."""
        return self.name is not None

    def to_symbol(self) -> str:
        """Return the symbolic name, or `Unrecognized(<value>)` for an unknown code."""
        if self.name is None:
            return f"Unrecognized({self.value})"
        return self.name


@dataclass
class RequestTypeParts:
    """A request type split into its format and its option flags.

    Attributes:
        format: The request format, e.g. `CertificateRequestType.PKCS10`.
        options: The option flags which are set, e.g. `[CertificateRequestType.RPC]`.

    """

    format: CertificateRequestType
    options: List[CertificateRequestType] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        """The names of the format and all options, the format first."""
        return [self.format.name] + [option.name for option in self.options]

    def to_int(self) -> int:
        """Return the combined request type value."""
        value = int(self.format)
        for option in self.options:
            value |= int(option)
        return value
