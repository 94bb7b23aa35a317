#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from _thread import allocate_lock
from collections import deque
from logging import Logger, getLogger
from math import inf, isinf, isnan
from typing import TYPE_CHECKING, Any, Final, Generic, TypeVar

from wrapt import decorator

from ._markers import MISSING, MissingType
from ._waiters import Waiter

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

    if sys.version_info >= (3, 9):
        from collections.abc import Iterable
    else:
        from typing import Iterable

LOGGER: Final[Logger] = getLogger(__name__)

_T = TypeVar("_T")


class QueueEmpty(Exception):
    """
    Raised when :meth:`BlockingQueue.get` cannot be satisfied, either
    immediately or within the given timeout.
    """


class QueueFull(Exception):
    """
    Raised when :meth:`BlockingQueue.put` cannot be satisfied, either
    immediately or within the given timeout.
    """


@decorator
def _synchronized(wrapped, instance, args, kwargs, /):
    with instance._lock:
        return wrapped(*args, **kwargs)


def _check_timeout(timeout: float | None, /) -> float | None:
    # negative means no-wait, None means forever, positive means bounded
    if timeout is None:
        return None

    if isinstance(timeout, int):
        try:
            timeout = float(timeout)
        except OverflowError:
            timeout = (-1 if timeout < 0 else 1) * inf

    if isnan(timeout):
        msg = "timeout must be non-NaN"
        raise ValueError(msg)

    if timeout < 0:
        return -1.0

    if timeout == 0 or isinf(timeout):
        return None

    return timeout


class BlockingQueue(Generic[_T]):
    """
    A thread-safe FIFO queue with blocking and timed operations.

    Blocked producers and consumers are parked on private single-use waiters
    in arrival order, and a value put into a queue that has a parked consumer
    is handed to that consumer directly, without passing through the storage.

    Timeouts are encoded as follows: a negative value means no waiting at all,
    zero (or :data:`None`) means waiting indefinitely, and a positive value
    means waiting up to that many seconds.

    Example:
        >>> items = BlockingQueue(2)
        >>> items.put('spam')
        >>> items.put_nowait('eggs')
        >>> items.put_nowait('ham')
        Traceback (most recent call last):
        blockingqueue._queue.QueueFull
        >>> items.get()
        'spam'
    """

    __slots__ = (
        "__weakref__",
        "_data",
        "_getters",
        "_lock",
        "_maxsize",
        "_putters",
        "_reserved",
    )

    @overload
    def __new__(cls, /, maxsize: int | None = None) -> Self: ...
    @overload
    def __new__(
        cls,
        items: Iterable[_T] | MissingType = MISSING,
        /,
        maxsize: int | None = None,
    ) -> Self: ...
    def __new__(cls, items=MISSING, /, maxsize=None):
        """
        Create a queue that holds at most *maxsize* items.

        If *maxsize* is zero or :data:`None`, the queue is unbounded and
        putting never blocks. If *items* is given, the queue is filled with
        them in order.

        Raises:
          TypeError:
            if *maxsize* is not an integer.
          ValueError:
            if *maxsize* is negative.
        """

        if maxsize is None and (items is None or isinstance(items, int)):
            items, maxsize = MISSING, items

        if maxsize is None:
            maxsize = 0
        elif not isinstance(maxsize, int):
            msg = f"maxsize must be an integer, not {type(maxsize).__name__}"
            raise TypeError(msg)
        elif maxsize < 0:
            msg = "maxsize must be >= 0 or None"
            raise ValueError(msg)

        self = object.__new__(cls)

        if items is not MISSING:
            self._data = deque(items)
        else:
            self._data = deque()

        self._lock = allocate_lock()

        self._putters = deque()
        self._getters = deque()

        self._maxsize = maxsize
        self._reserved = 0

        return self

    @_synchronized
    def __getnewargs__(self, /) -> tuple[Any, ...]:
        """
        Returns arguments that can be used to create new instances with the
        same state.

        Used by:

        * The :mod:`pickle` module for pickling.
        * The :mod:`copy` module for copying.

        The current state affects the arguments. Parked calls are not part of
        the state.

        Example:
            >>> orig = BlockingQueue('items')
            >>> orig.get()
            'i'
            >>> copy = BlockingQueue(*orig.__getnewargs__())
            >>> copy.get()
            't'
        """

        data = tuple(self._data)
        maxsize = self._maxsize

        if not data:
            if not maxsize:
                return ()

            return (maxsize,)
        else:
            if not maxsize:
                return (data,)

            return (data, maxsize)

    def __getstate__(self, /) -> None:
        """
        Disables the use of internal state for pickling and copying.
        """

        return None

    def __copy__(self, /) -> Self:
        """..."""

        return self.__class__(*self.__getnewargs__())

    def __repr__(self, /) -> str:
        """..."""

        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        items = list(self._data.copy())
        maxsize = self._maxsize

        if maxsize > 0:
            object_repr = f"{cls_repr}({items!r}, maxsize={maxsize!r})"
        else:
            object_repr = f"{cls_repr}({items!r})"

        length = len(items)

        if length >= maxsize > 0:
            extra = f"length={length}, putting={len(self._putters)}"
        elif length > 0:
            extra = f"length={length}"
        else:
            extra = f"length={length}, getting={len(self._getters)}"

        return f"<{object_repr} at {id(self):#x} [{extra}]>"

    def __bool__(self, /) -> bool:
        """
        Returns :data:`True` if the queue is not empty.

        Used by the standard :ref:`truth testing procedure <truth>`.

        Example:
            >>> items = BlockingQueue()  # queue is empty
            >>> bool(items)
            False
            >>> items.put('spam')  # queue is not empty
            >>> bool(items)
            True
            >>> item = items.get()  # queue is empty
            >>> bool(items)
            False
        """

        return bool(self._data)

    def __len__(self, /) -> int:
        """
        Returns the number of items in the queue.

        Used by the built-in function :func:`len`.

        Example:
            >>> items = BlockingQueue()  # queue has no items
            >>> len(items)
            0
            >>> items.put('spam')  # queue has one item
            >>> len(items)
            1
            >>> item = items.get()  # queue has no items
            >>> len(items)
            0
        """

        return len(self._data)

    def copy(self, /) -> Self:
        """..."""

        return self.__copy__()

    def _isfull(self, /) -> bool:
        # slots reserved for woken producers count as occupied
        return 0 < self._maxsize <= len(self._data) + self._reserved

    def _notify_putter(self, /) -> bool:
        if self._putters and not self._isfull():
            self._reserved += 1
            self._putters.popleft().set()

            return True

        return False

    def _notify_getter(self, /, item: _T) -> bool:
        if self._getters:
            self._getters.popleft().set(item)

            return True

        return False

    def _clear_pending(self, /) -> None:
        while True:
            while self._notify_putter():
                pass

            if not (self._data and self._getters):
                break

            while self._data and self._getters:
                self._notify_getter(self._data.popleft())

    def _put(self, /, item: _T) -> None:
        if not self._notify_getter(item):
            self._data.append(item)

    def get(self, /, timeout: float | None = None) -> _T:
        """
        Remove and return the oldest item.

        If the queue is empty and *timeout* is not negative, wait until an
        item is handed over by a producer (forever if *timeout* is zero or
        :data:`None`, otherwise up to *timeout* seconds).

        Raises:
          QueueEmpty:
            if no item could be obtained in time.
        """

        timeout = _check_timeout(timeout)

        with self._lock:
            self._clear_pending()

            if self._data:
                item = self._data.popleft()

                self._notify_putter()

                return item

            if timeout is not None and timeout < 0:
                raise QueueEmpty

            self._getters.append(waiter := Waiter())

        try:
            success = waiter.wait(timeout)
        except BaseException:
            with self._lock:
                if waiter.is_set():
                    LOGGER.debug(
                        "returning an undelivered item to %r",
                        self,
                    )

                    if not self._notify_getter(waiter.value):
                        self._data.appendleft(waiter.value)

                    self._clear_pending()
                else:
                    self._getters.remove(waiter)

            raise

        with self._lock:
            if not success:
                if not waiter.is_set():
                    self._getters.remove(waiter)

                    LOGGER.debug("timed out waiting to get from %r", self)

                    raise QueueEmpty

                LOGGER.debug("honoring a late delivery from %r", self)

            self._notify_putter()

        return waiter.value

    def get_nowait(self, /) -> _T:
        """
        The same as ``get(-1)``.
        """

        return self.get(-1)

    def put(self, /, item: _T, timeout: float | None = None) -> None:
        """
        Put *item* into the queue.

        If a consumer is waiting, the item is handed to it directly. If the
        queue is full and *timeout* is not negative, wait until a slot is
        freed (forever if *timeout* is zero or :data:`None`, otherwise up to
        *timeout* seconds).

        Raises:
          QueueFull:
            if the item could not be put in time.
        """

        timeout = _check_timeout(timeout)

        with self._lock:
            self._clear_pending()

            if not self._isfull():
                self._put(item)

                return

            if timeout is not None and timeout < 0:
                raise QueueFull

            self._putters.append(waiter := Waiter())

        try:
            success = waiter.wait(timeout)
        except BaseException:
            with self._lock:
                if waiter.is_set():
                    LOGGER.debug("passing on a reserved slot of %r", self)

                    self._reserved -= 1
                    self._clear_pending()
                else:
                    self._putters.remove(waiter)

            raise

        with self._lock:
            if not success:
                if not waiter.is_set():
                    self._putters.remove(waiter)

                    LOGGER.debug("timed out waiting to put into %r", self)

                    raise QueueFull

                LOGGER.debug("honoring a late wake-up from %r", self)

            self._reserved -= 1
            self._put(item)
            self._clear_pending()

    def put_nowait(self, /, item: _T) -> None:
        """
        The same as ``put(item, -1)``.
        """

        return self.put(item, -1)

    @_synchronized
    def size(self, /) -> int:
        """
        Return the number of stored items.

        The result is only a snapshot; do not use it to predict whether a
        subsequent call will block.
        """

        return len(self._data)

    @_synchronized
    def is_empty(self, /) -> bool:
        """
        Return :data:`True` if no items are stored.
        """

        return not self._data

    @_synchronized
    def is_full(self, /) -> bool:
        """
        Return :data:`True` if the queue is bounded and holds *maxsize* items.
        """

        return 0 < self._maxsize <= len(self._data)

    @property
    def maxsize(self, /) -> int:
        """
        The maximum number of items which the queue can hold, or zero if the
        queue is unbounded.
        """

        return self._maxsize

    @property
    def putting(self, /) -> int:
        """
        The current number of threads waiting to put.
        """

        return len(self._putters)

    @property
    def getting(self, /) -> int:
        """
        The current number of threads waiting to get.
        """

        return len(self._getters)

    @property
    def waiting(self, /) -> int:
        """
        The current number of threads waiting to access.

        It is the sum of the :attr:`putting` and :attr:`getting` properties.
        """

        return len(self._putters) + len(self._getters)
