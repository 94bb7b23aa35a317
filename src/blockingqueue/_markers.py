#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from typing import TYPE_CHECKING, Any, NoReturn

if sys.version_info >= (3, 11):  # runtime introspection support
    from typing import final
else:  # typing-extensions>=4.1.0
    from typing_extensions import final

if TYPE_CHECKING:
    from typing import Final

    if sys.version_info >= (3, 11):  # a caching bug fix
        from typing import Literal
    else:  # typing-extensions>=4.6.0
        from typing_extensions import Literal

# We use the `enum` module so that type checkers can understand that the
# instance is a singleton object and narrow `x is MISSING` checks.


@final
class MissingType(enum.Enum):
    """
    A singleton class for :data:`MISSING`; mimics :data:`~types.NoneType`.

    Unlike :data:`None`, it can be used where :data:`None` is a meaningful
    value, such as an item stored in a queue.
    """

    MISSING = "MISSING"

    def __init_subclass__(cls, /, **kwargs: Any) -> NoReturn:
        bcs = MissingType
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __str__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __bool__(self, /) -> Literal[False]:
        return False


MISSING: Final[Literal[MissingType.MISSING]] = MissingType.MISSING
