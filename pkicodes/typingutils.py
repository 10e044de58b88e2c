# SPDX-FileCopyrightText: Copyright 2024 Siemens AG
#
# SPDX-License-Identifier: Apache-2.0

"""Type aliases to enhance code readability of the code registry."""

import enum
from typing import Type, Union

# RobotFramework passes numbers as strings, so most keywords accept both.
Strint = Union[str, int]

# A code domain is either one of the enum classes or one of its string aliases.
CodeDomain = Union[str, Type[enum.Enum]]

# A single code given as member, symbolic name or (stringified) integer.
CodeSymbol = Union[enum.Enum, str, int]
