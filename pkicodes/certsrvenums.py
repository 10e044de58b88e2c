# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Enums for the status codes of a certificate services Certification Authority.

The values mirror the integer codes returned by `ICertRequest::Submit`/`RetrievePending`,
stored in the `Request.Disposition` column of the CA database and passed as request-type flags
when a request is submitted. They are defined by the external interface and must never be renumbered.
"""

import enum
import functools
import operator
from typing import Dict, List, Optional, Type

from pkicodes.config_vars import LookupConfig
from pkicodes.exceptions import UnknownSymbol, UnrecognizedValue
from pkicodes.typingutils import Strint

# The request format is stored in this field; the bits above it are option flags.
CR_IN_FORMATMASK = 0x0000FF00


def parse_int_code(value: Strint) -> int:
    """Convert an integer or a decimal/hexadecimal string into an `int`.

    :param value: The value to convert.
    :return: The parsed integer.
    :raises ValueError: If the string is not an integer.
    """
    if isinstance(value, int):
        return int(value)

    text = str(value).strip()
    if text.lower().startswith(("0x", "-0x")):
        return int(text, 16)
    return int(text)


def is_int_code(value: Strint) -> bool:
    """Check if the value is an integer or a string holding one."""
    if isinstance(value, int):
        return True
    try:
        parse_int_code(value)
    except ValueError:
        return False
    return True


class _CodeLookupMixin:
    """Name and value lookups shared by all code enums."""

    @classmethod
    def get_names(cls) -> List[str]:
        """Return the names of all members, including zero and multi-bit flag members."""
        return list(cls.__members__)  # type: ignore[attr-defined]

    @classmethod
    def from_name(cls, name: str, config: Optional[LookupConfig] = None):
        """Return the member for a symbolic name.

        The name is matched exactly first, then case-insensitive and then against the
        certificate services constant names, as permitted by the `config`.

        :param name: The symbolic name, e.g. "Issued" or "CR_DISP_ISSUED".
        :param config: The lookup configuration. Defaults to `LookupConfig()`.
        :return: The matching enum member.
        :raises UnknownSymbol: If the name is not a member of this domain.
        """
        config = config or LookupConfig()
        members = cls.__members__  # type: ignore[attr-defined]
        key = str(name).strip()

        if key in members:
            return members[key]

        if config.case_insensitive:
            for member_name, member in members.items():
                if member_name.lower() == key.lower():
                    return member

        if config.allow_native_names:
            native = NATIVE_NAMES.get(cls, {})
            for member_name, native_name in native.items():
                same = native_name == key or (config.case_insensitive and native_name == key.upper())
                if same:
                    return members[member_name]

        raise UnknownSymbol(
            name, cls.__name__, extra_info=f"Available names are: {', '.join(cls.get_names())}."
        )

    @classmethod
    def from_value(cls, value: Strint):
        """Return the member which has exactly the given value.

        Composite flag values are not members; use the request-type helpers for those.

        :param value: The integer code or its string representation.
        :return: The matching enum member.
        :raises UnrecognizedValue: If no member has this value.
        :raises ValueError: If the value is not an integer.
        """
        try:
            number = parse_int_code(value)
        except ValueError as err:
            raise ValueError(f"The value {value!r} is not an integer code for {cls.__name__}.") from err

        for member in cls.__members__.values():  # type: ignore[attr-defined]
            if member.value == number:
                return member
        raise UnrecognizedValue(number, cls.__name__)

    @classmethod
    def get(cls, value, config: Optional[LookupConfig] = None):
        """Return the member matching the provided value, which may be a member, a name or an integer.

        :param value: The member, symbolic name or (stringified) integer code.
        :param config: The lookup configuration. Defaults to `LookupConfig()`.
        :return: The matching enum member.
        :raises ValueError: If the value is a member of another code domain.
        :raises UnknownSymbol: If a name is not a member of this domain.
        :raises UnrecognizedValue: If an integer does not match a member.
        """
        if isinstance(value, cls):
            return value

        if isinstance(value, enum.Enum):
            raise ValueError(
                f"Codes of different domains must not be compared: got {type(value).__name__}.{value.name}"
                f" for {cls.__name__}."
            )

        if is_int_code(value):
            return cls.from_value(value)
        return cls.from_name(value, config=config)

    @property
    def native_name(self) -> Optional[str]:
        """The certificate services constant name of the member."""
        return NATIVE_NAMES.get(type(self), {}).get(self.name)  # type: ignore[attr-defined]

    @property
    def description(self) -> Optional[str]:
        """A human-readable description of the member."""
        return DESCRIPTIONS.get(type(self), {}).get(self.name)  # type: ignore[attr-defined]


class CAResponseDisposition(_CodeLookupMixin, enum.IntEnum):
    """Disposition returned by the CA when a request is submitted or retrieved."""

    Incomplete = 0
    Error = 1
    Denied = 2
    Issued = 3
    IssuedOutOfBand = 4
    UnderSubmission = 5
    Revoked = 6


class CertificateRequestDisposition(_CodeLookupMixin, enum.IntEnum):
    """Disposition of a request as stored in the CA database."""

    Active = 8
    Pending = 9
    Foreign = 12
    CACert = 15
    CACertChain = 16
    KRACert = 17
    Issued = 20
    Revoked = 21
    Error = 30
    Denied = 31


class CertificateRequestType(_CodeLookupMixin, enum.IntFlag):
    """Request-type flags used for submitting a certificate request.

    One format value (masked by `CR_IN_FORMATMASK`) is combined with any of the option flags.
    `PKCS7` shares its bits with `PKCS10 | KeyGen`, so formats must be compared as a field.
    """

    FormatAny = 0
    PKCS10 = 256
    KeyGen = 512
    PKCS7 = 768
    CMC = 1024
    RPC = 131072
    FullResponse = 262144
    CRLs = 524288


REQUEST_FORMATS = (
    CertificateRequestType.FormatAny,
    CertificateRequestType.PKCS10,
    CertificateRequestType.KeyGen,
    CertificateRequestType.PKCS7,
    CertificateRequestType.CMC,
)

REQUEST_OPTIONS = (
    CertificateRequestType.RPC,
    CertificateRequestType.FullResponse,
    CertificateRequestType.CRLs,
)

# All bits which may appear in a request type.
REQUEST_TYPE_KNOWN_BITS = functools.reduce(operator.or_, (int(x) for x in REQUEST_FORMATS + REQUEST_OPTIONS))

CODE_ENUMS: List[Type[enum.Enum]] = [
    CAResponseDisposition,
    CertificateRequestDisposition,
    CertificateRequestType,
]

NATIVE_NAMES: Dict[type, Dict[str, str]] = {
    CAResponseDisposition: {
        "Incomplete": "CR_DISP_INCOMPLETE",
        "Error": "CR_DISP_ERROR",
        "Denied": "CR_DISP_DENIED",
        "Issued": "CR_DISP_ISSUED",
        "IssuedOutOfBand": "CR_DISP_ISSUED_OUT_OF_BAND",
        "UnderSubmission": "CR_DISP_UNDER_SUBMISSION",
        "Revoked": "CR_DISP_REVOKED",
    },
    CertificateRequestDisposition: {
        "Active": "DB_DISP_ACTIVE",
        "Pending": "DB_DISP_PENDING",
        "Foreign": "DB_DISP_FOREIGN",
        "CACert": "DB_DISP_CA_CERT",
        "CACertChain": "DB_DISP_CA_CERT_CHAIN",
        "KRACert": "DB_DISP_KRA_CERT",
        "Issued": "DB_DISP_ISSUED",
        "Revoked": "DB_DISP_REVOKED",
        "Error": "DB_DISP_ERROR",
        "Denied": "DB_DISP_DENIED",
    },
    CertificateRequestType: {
        "FormatAny": "CR_IN_FORMATANY",
        "PKCS10": "CR_IN_PKCS10",
        "KeyGen": "CR_IN_KEYGEN",
        "PKCS7": "CR_IN_PKCS7",
        "CMC": "CR_IN_CMC",
        "RPC": "CR_IN_RPC",
        "FullResponse": "CR_IN_FULLRESPONSE",
        "CRLs": "CR_IN_CRLS",
    },
}

DESCRIPTIONS: Dict[type, Dict[str, str]] = {
    CAResponseDisposition: {
        "Incomplete": "The request did not complete.",
        "Error": "The request failed.",
        "Denied": "The request was denied.",
        "Issued": "The certificate was issued.",
        "IssuedOutOfBand": "The certificate was issued separately.",
        "UnderSubmission": "The request was taken under submission.",
        "Revoked": "The certificate was revoked.",
    },
    CertificateRequestDisposition: {
        "Active": "The request is being processed.",
        "Pending": "The request is pending.",
        "Foreign": "The certificate was imported from another CA.",
        "CACert": "A CA certificate.",
        "CACertChain": "A CA certificate chain.",
        "KRACert": "A key recovery agent certificate.",
        "Issued": "The certificate was issued.",
        "Revoked": "The certificate was revoked.",
        "Error": "The request failed.",
        "Denied": "The request was denied.",
    },
    CertificateRequestType: {
        "FormatAny": "The request format is detected by the CA.",
        "PKCS10": "A PKCS #10 certificate request.",
        "KeyGen": "A Netscape KEYGEN request.",
        "PKCS7": "A PKCS #7 (CMS) certificate request.",
        "CMC": "A Certificate Management over CMS request.",
        "RPC": "The request is submitted over RPC.",
        "FullResponse": "Return a full CMC response.",
        "CRLs": "Return the current CRLs with the response.",
    },
}
