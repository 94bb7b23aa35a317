#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
Thread-safe blocking FIFO queue for Python

This package provides a bounded (or unbounded) FIFO queue for coordinating
producers and consumers that run in separate threads. Blocked calls are parked
on private single-use waiters and served strictly in arrival order, a value
put into a queue with a waiting consumer is handed to it directly, and timed
calls that expire never lose or duplicate an item.

Timeouts are given in seconds: a negative value means no waiting, zero (or
:data:`None`) means waiting indefinitely.
"""

from __future__ import annotations

__author__: str = "Ilya Egorov <0x42005e1f@gmail.com>"
__version__: str = "0.1.0"

from ._markers import (
    MISSING as MISSING,
    MissingType as MissingType,
)
from ._queue import (
    BlockingQueue as BlockingQueue,
    QueueEmpty as QueueEmpty,
    QueueFull as QueueFull,
)
