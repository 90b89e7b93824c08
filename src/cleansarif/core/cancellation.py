# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cooperative cancellation for long-running load and export passes.

Long operations accept a ``should_cancel`` callable and poll it at fixed
checkpoints.  A :class:`CancellationToken` is such a callable backed by a
``threading.Event``, so a caller on another thread can request
cancellation while a worker thread runs the operation.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from cleansarif.core.exceptions import OperationCancelled

ShouldCancel = Callable[[], bool]


def never_cancel() -> bool:
    return False


def raise_if_cancelled(should_cancel: ShouldCancel, stage: str = "") -> None:
    """Raise :class:`OperationCancelled` if *should_cancel* reports true."""
    if should_cancel():
        suffix = f" during {stage}" if stage else ""
        raise OperationCancelled(f"Operation cancelled{suffix}")


class CancellationToken:
    """Thread-safe cancellation flag usable as a ``should_cancel`` callable."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def __call__(self) -> bool:
        return self._event.is_set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()
