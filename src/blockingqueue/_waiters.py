#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from _thread import allocate_lock
from math import inf, isinf, isnan
from threading import TIMEOUT_MAX
from time import monotonic
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

if sys.version_info >= (3, 11):
    from typing import final
else:
    from typing_extensions import final

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

_T = TypeVar("_T")


def _long_wait(
    wait: Callable[[float], bool],
    seconds: float,
    /,
    seconds_per_wait: float,
    *,
    clock: Callable[[], float],
) -> bool:
    if seconds > seconds_per_wait:
        deadline = clock() + seconds

        while True:
            if wait(seconds_per_wait):
                return True

            seconds = deadline - clock()

            if seconds <= 0:
                return False

            if seconds <= seconds_per_wait:
                break

    return wait(seconds)


@final
class Waiter(Generic[_T]):
    """
    A single-use, single-slot signal that represents one parked call.

    The owner thread calls :meth:`wait` exactly once; any other thread may call
    :meth:`set` to fill the slot and wake the owner. Since the underlying lock
    is acquired at creation and released only by the first :meth:`set`, there
    are no spurious wake-ups.

    Example:
        >>> waiter = Waiter()
        >>> waiter.set('spam')
        True
        >>> waiter.wait(0)
        True
        >>> waiter.value
        'spam'
    """

    __slots__ = (
        "__lock",
        "_is_pending",
        "_is_set",
        "_value",
    )

    def __init__(self, /) -> None:
        self.__lock = allocate_lock()
        self.__lock.acquire()

        self._is_pending = True
        self._is_set = False
        self._value = None

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        if self._is_set:
            state = "set"
        elif self._is_pending:
            state = "unset"
        else:
            state = "waiting"

        return f"<{cls_repr} object at {id(self):#x}: {state}>"

    def __bool__(self, /) -> bool:
        return self._is_set

    def set(self, /, value: Any = None) -> bool:
        """
        Fill the slot with *value* and wake the owner.

        Returns :data:`False` if the waiter has already been set. Callers must
        serialize calls to this method (the queue does so with its own lock).
        """

        if self._is_set:
            return False

        self._value = value
        self._is_set = True

        self.__lock.release()

        return True

    def is_set(self, /) -> bool:
        return self._is_set

    def wait(self, /, timeout: float | None = None) -> bool:
        """
        Block until the waiter is set or *timeout* seconds have passed.

        :data:`None` and infinity mean waiting forever, zero means polling.
        Returns :data:`True` if the waiter has been set.

        Raises:
          ValueError:
            if *timeout* is NaN or negative.
          RuntimeError:
            if the waiter is already in use.
        """

        if timeout is not None:
            if isinstance(timeout, int):
                try:
                    timeout = float(timeout)
                except OverflowError:
                    timeout = (-1 if timeout < 0 else 1) * inf

            if isnan(timeout):
                msg = "timeout must be non-NaN"
                raise ValueError(msg)

            if timeout < 0:
                msg = "timeout must be non-negative"
                raise ValueError(msg)

            if isinf(timeout):
                timeout = None

        if not self._is_pending:
            msg = "this waiter is already in use"
            raise RuntimeError(msg)

        self._is_pending = False

        if timeout is None:
            return self.__lock.acquire()
        elif timeout:
            return _long_wait(
                self.__wait_with_timeout,
                timeout,
                TIMEOUT_MAX,
                clock=monotonic,
            )
        else:
            return self.__lock.acquire(False)

    def __wait_with_timeout(self, /, timeout: float) -> bool:
        return self.__lock.acquire(True, timeout)

    @property
    def value(self, /) -> _T:
        """
        The value the waiter has been set with.

        Raises:
          LookupError:
            if the waiter is not set.
        """

        if not self._is_set:
            msg = "waiter is not set"
            raise LookupError(msg)

        return self._value
