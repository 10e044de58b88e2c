# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Keywords to look up, decode and compose the codes of a certificate services CA.

Unknown codes returned by a CA are reported by `UnrecognizedValue` in the strict lookups and as an
explicit unrecognized result by `Decode Code` and `May Return Code Name`.
"""

import enum
import logging
from typing import Dict, List, Optional, Sequence, Type, Union

from robot.api.deco import keyword, not_keyword

from pkicodes.certsrvenums import (
    CODE_ENUMS,
    CR_IN_FORMATMASK,
    REQUEST_FORMATS,
    REQUEST_OPTIONS,
    REQUEST_TYPE_KNOWN_BITS,
    CAResponseDisposition,
    CertificateRequestDisposition,
    CertificateRequestType,
    is_int_code,
    parse_int_code,
)
from pkicodes.config_vars import LookupConfig
from pkicodes.data_objects import DecodedCode, RequestTypeParts
from pkicodes.exceptions import UnrecognizedValue
from pkicodes.typingutils import CodeDomain, CodeSymbol, Strint

DOMAIN_ALIASES: Dict[str, Type[enum.Enum]] = {
    "caresponsedisposition": CAResponseDisposition,
    "caresponse.disposition": CAResponseDisposition,
    "certificaterequestdisposition": CertificateRequestDisposition,
    "certificaterequest.disposition": CertificateRequestDisposition,
    "certificaterequesttype": CertificateRequestType,
    "certificaterequest.requesttype": CertificateRequestType,
    "requesttype": CertificateRequestType,
}


@not_keyword
def get_code_domain(domain: CodeDomain) -> Type[enum.Enum]:
    """Return the enum class of a code domain.

    :param domain: The enum class or one of its names, e.g. "CAResponse.Disposition".
    :return: The enum class.
    :raises ValueError: If the domain is unknown.
    """
    if isinstance(domain, type) and domain in CODE_ENUMS:
        return domain

    if isinstance(domain, str):
        found = DOMAIN_ALIASES.get(domain.strip().lower())
        if found is not None:
            return found

    allowed = ", ".join(cls.__name__ for cls in CODE_ENUMS)
    raise ValueError(f"Unknown code domain: {domain!r}. Allowed domains are: {allowed}.")


@keyword(name="Get Code Value")
def get_code_value(  # noqa D417 undocumented-param
    domain: CodeDomain, name: str, config: Optional[LookupConfig] = None
) -> int:
    """Return the integer value of a symbolic name within a code domain.

    Arguments:
    ---------
        - `domain`: The code domain, e.g. "CAResponseDisposition" or "CertificateRequest.Disposition".
        - `name`: The symbolic name, e.g. "Issued", or the constant name, e.g. "CR_DISP_ISSUED".
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - The integer code.

    Raises:
    ------
        - `ValueError`: If the domain is unknown.
        - `UnknownSymbol`: If the name is not a member of the domain.

    Examples:
    --------
    | ${value}= | Get Code Value | CAResponseDisposition | Issued |
    | ${value}= | Get Code Value | RequestType | CR_IN_PKCS10 |

    """
    enum_cls = get_code_domain(domain)
    member = enum_cls.from_name(name, config=config)  # type: ignore[attr-defined]
    logging.debug("%s.%s = %d", enum_cls.__name__, member.name, member.value)
    return int(member.value)


@keyword(name="Get Code Name")
def get_code_name(domain: CodeDomain, value: Strint) -> str:  # noqa D417 undocumented-param
    """Return the symbolic name of an integer code within a code domain.

    Arguments:
    ---------
        - `domain`: The code domain, e.g. "CAResponseDisposition".
        - `value`: The integer code, which may be given as string.

    Returns:
    -------
        - The symbolic name of the member with exactly this value.

    Raises:
    ------
        - `ValueError`: If the domain is unknown or the value is not an integer.
        - `UnrecognizedValue`: If no member of the domain has this value.

    Examples:
    --------
    | ${name}= | Get Code Name | CAResponseDisposition | 3 |

    """
    enum_cls = get_code_domain(domain)
    return enum_cls.from_value(value).name  # type: ignore[attr-defined]


@keyword(name="Decode Code")
def decode_code(  # noqa D417 undocumented-param
    domain: CodeDomain, value: Strint, config: Optional[LookupConfig] = None
) -> DecodedCode:
    """Decode a raw code returned by a CA into a descriptive result.

    An unknown code does not raise an error, but returns a result with `is_recognized` set to `False`,
    because a CA may return codes which are not known to this library.

    Arguments:
    ---------
        - `domain`: The code domain, e.g. "CertificateRequestDisposition".
        - `value`: The integer code, which may be given as string.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - The `DecodedCode` with the name, description and constant name of the code.

    Raises:
    ------
        - `ValueError`: If the domain is unknown, the value is not an integer or belongs to another domain.

    Examples:
    --------
    | ${decoded}= | Decode Code | CertificateRequestDisposition | ${disposition} |
    | Should Be True | ${decoded.is_recognized} |

    """
    config = config or LookupConfig()
    enum_cls = get_code_domain(domain)
    if isinstance(value, enum.Enum):
        value = enum_cls.get(value)  # type: ignore[attr-defined]
    number = parse_int_code(value)

    try:
        member = enum_cls.from_value(number)  # type: ignore[attr-defined]
    except UnrecognizedValue as err:
        if config.log_unrecognized:
            logging.warning("%s", err.message)
        return DecodedCode(domain=enum_cls.__name__, value=number)

    return DecodedCode(
        domain=enum_cls.__name__,
        value=number,
        name=member.name,
        description=member.description,
        native_name=member.native_name,
    )


@keyword(name="May Return Code Name")
def may_return_code_name(  # noqa D417 undocumented-param
    domain: CodeDomain, value: Strint, config: Optional[LookupConfig] = None
) -> str:
    """Return the symbolic name of a code, or `Unrecognized(<value>)` if the code is unknown.

    Arguments:
    ---------
        - `domain`: The code domain, e.g. "CAResponseDisposition".
        - `value`: The integer code, which may be given as string.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - The symbolic name or `Unrecognized(<value>)`.

    Raises:
    ------
        - `ValueError`: If the domain is unknown or the value is not an integer.

    Examples:
    --------
    | ${name}= | May Return Code Name | CAResponseDisposition | 999 |
    | Should Be Equal | ${name} | Unrecognized(999) |

    """
    return decode_code(domain, value, config=config).to_symbol()


def _resolve_request_type_flag(flag: CodeSymbol, config: Optional[LookupConfig] = None) -> int:
    """Resolve a single request-type flag or a `|`/`,` separated list of names into an integer.

    :param flag: A `CertificateRequestType`, name, constant name or (stringified) integer.
    :param config: The lookup configuration.
    :return: The integer value.
    :raises UnrecognizedValue: If an integer carries bits which are not defined.
    :raises UnknownSymbol: If a name is unknown.
    """
    if isinstance(flag, enum.Enum):
        return int(CertificateRequestType.get(flag))

    if is_int_code(flag):
        number = parse_int_code(flag)  # type: ignore[arg-type]
        unknown_bits = number & ~REQUEST_TYPE_KNOWN_BITS
        if number < 0 or unknown_bits:
            raise UnrecognizedValue(
                number, CertificateRequestType.__name__, extra_info=f"Unknown bits: {hex(unknown_bits)}"
            )
        return number

    value = 0
    for name in str(flag).replace("|", ",").split(","):
        if name.strip():
            value |= int(CertificateRequestType.from_name(name, config=config))
    return value


def _request_type_to_int(request_type: CodeSymbol, config: Optional[LookupConfig] = None) -> int:
    """Return a request type as integer, without restricting the bits of integer input."""
    if isinstance(request_type, enum.Enum) or not is_int_code(request_type):
        return _resolve_request_type_flag(request_type, config=config)
    return parse_int_code(request_type)  # type: ignore[arg-type]


@keyword(name="Combine Request Type Flags")
def combine_request_type_flags(  # noqa D417 undocumented-param
    *flags: CodeSymbol, config: Optional[LookupConfig] = None
) -> CertificateRequestType:
    """Combine request-type flags with a bitwise OR.

    Usually one request format is combined with any number of option flags (`RPC`, `FullResponse`, `CRLs`).

    Arguments:
    ---------
        - `flags`: The flags as `CertificateRequestType`, names, constant names or integers.
        A name argument may also hold several names separated by `|` or `,`.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - The combined `CertificateRequestType`. `FormatAny` if no flag is given.

    Raises:
    ------
        - `UnknownSymbol`: If a name is not a request-type flag.
        - `UnrecognizedValue`: If an integer carries bits which are not defined.

    Examples:
    --------
    | ${flags}= | Combine Request Type Flags | PKCS10 | RPC |
    | ${flags}= | Combine Request Type Flags | CR_IN_CMC|CR_IN_FULLRESPONSE |

    """
    value = 0
    for flag in flags:
        value |= _resolve_request_type_flag(flag, config=config)
    logging.debug("Combined request type flags: %s", hex(value))
    return CertificateRequestType(value)


@keyword(name="Request Type Has Flag")
def request_type_has_flag(  # noqa D417 undocumented-param
    request_type: CodeSymbol, flag: CodeSymbol, config: Optional[LookupConfig] = None
) -> bool:
    """Check if all bits of a flag are set in a request type.

    The check is a bitwise AND, so `PKCS10` is also contained in `PKCS7`; use
    `Get Request Format` to compare the format itself. `FormatAny` is only contained,
    if no format bit is set.

    Arguments:
    ---------
        - `request_type`: The request type as integer, `CertificateRequestType` or names.
        - `flag`: The flag to check for.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - `True` if the flag is set, otherwise `False`.

    Raises:
    ------
        - `UnknownSymbol`: If a name is not a request-type flag.
        - `UnrecognizedValue`: If the flag carries bits which are not defined.

    Examples:
    --------
    | ${has_rpc}= | Request Type Has Flag | ${request_type} | RPC |

    """
    value = _request_type_to_int(request_type, config=config)
    flag_value = _resolve_request_type_flag(flag, config=config)
    if flag_value == 0:
        return value & CR_IN_FORMATMASK == 0
    return value & flag_value == flag_value


@keyword(name="Get Request Format")
def get_request_format(  # noqa D417 undocumented-param
    request_type: CodeSymbol, config: Optional[LookupConfig] = None
) -> CertificateRequestType:
    """Return the request format of a request type, ignoring the option flags.

    Arguments:
    ---------
        - `request_type`: The request type as integer, `CertificateRequestType` or names.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - The format, one of `FormatAny`, `PKCS10`, `KeyGen`, `PKCS7` or `CMC`.

    Raises:
    ------
        - `UnrecognizedValue`: If the format field is not a defined format.

    Examples:
    --------
    | ${format}= | Get Request Format | ${request_type} |
    | Should Be Equal | ${format.name} | PKCS10 |

    """
    field = _request_type_to_int(request_type, config=config) & CR_IN_FORMATMASK
    for request_format in REQUEST_FORMATS:
        if int(request_format) == field:
            return request_format
    raise UnrecognizedValue(field, CertificateRequestType.__name__, extra_info="The format field is not defined.")


@keyword(name="Decompose Request Type")
def decompose_request_type(  # noqa D417 undocumented-param
    request_type: CodeSymbol, config: Optional[LookupConfig] = None
) -> RequestTypeParts:
    """Split a request type into its format and its option flags.

    Arguments:
    ---------
        - `request_type`: The request type as integer, `CertificateRequestType` or names.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Returns:
    -------
        - The `RequestTypeParts` with the format and the list of set option flags.

    Raises:
    ------
        - `UnrecognizedValue`: If undefined bits are set or the format field is not defined.

    Examples:
    --------
    | ${parts}= | Decompose Request Type | 131328 |
    | Should Be Equal | ${parts.names} | ${{["PKCS10", "RPC"]}} |

    """
    value = _request_type_to_int(request_type, config=config)
    unknown_bits = value & ~REQUEST_TYPE_KNOWN_BITS
    if value < 0 or unknown_bits:
        raise UnrecognizedValue(
            value, CertificateRequestType.__name__, extra_info=f"Unknown bits: {hex(unknown_bits)}"
        )

    options = [option for option in REQUEST_OPTIONS if value & int(option)]
    return RequestTypeParts(format=get_request_format(value), options=options)


def _prepare_expected_members(
    enum_cls: Type[enum.Enum],
    expected: Union[CodeSymbol, Sequence[CodeSymbol]],
    config: Optional[LookupConfig] = None,
) -> List[enum.Enum]:
    """Resolve the expected codes of `disposition_must_be` into members."""
    if isinstance(expected, str):
        entries: List[CodeSymbol] = [x.strip() for x in expected.split(",") if x.strip()]
    elif isinstance(expected, (list, tuple, set)):
        entries = list(expected)
    else:
        entries = [expected]  # type: ignore[list-item]

    return [enum_cls.get(entry, config=config) for entry in entries]  # type: ignore[attr-defined]


@keyword(name="Disposition Must Be")
def disposition_must_be(  # noqa D417 undocumented-param
    domain: CodeDomain,
    value: Strint,
    expected: Union[CodeSymbol, Sequence[CodeSymbol]],
    config: Optional[LookupConfig] = None,
) -> None:
    """Check that a code returned by the CA is one of the expected codes.

    Arguments:
    ---------
        - `domain`: The code domain, e.g. "CAResponseDisposition".
        - `value`: The code returned by the CA, which may be given as string.
        - `expected`: The expected name or value, a comma-separated string of names
        (e.g. "Issued,IssuedOutOfBand") or a list.
        - `config`: The lookup configuration. Defaults to `None` (default lookup).

    Raises:
    ------
        - `ValueError`: If the code is not one of the expected codes.
        - `UnknownSymbol`: If an expected name is not a member of the domain.

    Examples:
    --------
    | Disposition Must Be | CAResponseDisposition | ${disposition} | Issued |
    | Disposition Must Be | CertificateRequestDisposition | ${disposition} | Revoked,Denied |

    """
    enum_cls = get_code_domain(domain)
    expected_members = _prepare_expected_members(enum_cls, expected, config=config)
    decoded = decode_code(enum_cls, value, config=config)

    if decoded.value not in [int(member.value) for member in expected_members]:
        names = ", ".join(member.name for member in expected_members)
        raise ValueError(
            f"Invalid {enum_cls.__name__}. Expected: {names}. Got: {decoded.to_symbol()} ({decoded.value})."
        )
    logging.info("%s is %s.", enum_cls.__name__, decoded.to_symbol())
