# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Contains Custom Exceptions for the code registry."""

from typing import List, Optional, Union


class PKICodesError(Exception):
    """Base class for code registry errors."""

    error_details: List[str]

    def __init__(self, message: str, error_details: Optional[Union[List[str], str]] = None):
        """Initialize the exception with the message.

        :param message: The message to display.
        :param error_details: Additional details about the error.
        """
        self.message = message
        self.error_details = []
        if isinstance(error_details, str):
            self.error_details = [error_details]
        elif error_details is not None:
            self.error_details = list(error_details)
        super().__init__(message)

    def get_error_details(self) -> List[str]:
        """Return the error details."""
        return self.error_details


class UnknownSymbol(PKICodesError, LookupError):
    """Raised when a symbolic name is not a member of the requested code domain."""

    def __init__(self, name: str, domain: str, extra_info: str = ""):
        """Initialize the exception with the name and the domain.

        :param name: The name which could not be found.
        :param domain: The name of the code domain which was searched.
        :param extra_info: Additional information, e.g. the allowed names.
        """
        self.name = name
        self.domain = domain
        message = f"Unknown symbol for {domain}: {name!r}"
        super().__init__(message, error_details=extra_info or None)


class UnrecognizedValue(PKICodesError, ValueError):
    """Raised when an integer code does not match any member of the code domain.

    External certificate services may return codes which are not (yet) known,
    so this error is meant to be caught and reported, not to abort the caller.
    """

    def __init__(self, value: int, domain: str, extra_info: str = ""):
        """Initialize the exception with the value and the domain.

        :param value: The integer code which could not be matched.
        :param domain: The name of the code domain which was searched.
        :param extra_info: Additional information about the value.
        """
        self.value = value
        self.domain = domain
        message = f"Unrecognized value for {domain}: {value}"
        super().__init__(message, error_details=extra_info or None)
