"""Lazy quantum vectors backed by an association sequence.

A vector here is an ordered run of ``(element, amplitude)`` pairs that may be
infinite. Keys are not checked for uniqueness: when an element appears more
than once, lookups see the first occurrence. Keeping the basis free of
duplicates is up to the caller.

Normalization is checked on a bounded prefix, which is what lets a vector
over the non-negative integers be built at all::

    >>> qv = q_integer()
    >>> amplitude(qv, 2)
    (0.5+0j)
"""
import itertools
import logging
import threading
from typing import Hashable, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .basis import basis
from .errors import NormalizationError

logger = logging.getLogger(__name__)

TOLERANCE = 1e-9
BUDGET = 1000

K = TypeVar("K")
V = TypeVar("V")


class QV:
    """Restartable, memoized view over a possibly infinite pair sequence.

    The source iterable is consumed at most once and only as far as callers
    have walked; everything pulled from it is cached so every iteration sees
    the same pairs in the same order.
    """

    def __init__(self, pairs: Iterable[Tuple[Hashable, complex]]):
        self._source: Optional[Iterator] = iter(pairs)
        self._cache: List[Tuple[Hashable, complex]] = []
        self._lock = threading.Lock()

    def _pull(self, i: int) -> bool:
        # ensure entry i is cached; False once the source is exhausted
        with self._lock:
            while len(self._cache) <= i:
                if self._source is None:
                    return False
                try:
                    k, v = next(self._source)
                except StopIteration:
                    self._source = None
                    return False
                self._cache.append((k, complex(v)))
            return True

    def __iter__(self) -> Iterator[Tuple[Hashable, complex]]:
        i = 0
        while self._pull(i):
            yield self._cache[i]
            i += 1

    def __repr__(self):
        shown = ", ".join(f"({k!r}, {v!r})" for k, v in itertools.islice(self, 4))
        return f"QV([{shown}, ...])" if self._pull(4) else f"QV([{shown}])"


def unchecked_q_vector(pairs: Iterable[Tuple[Hashable, complex]]) -> QV:
    """Wrap ``pairs`` as a quantum vector without checking normalization."""
    return pairs if isinstance(pairs, QV) else QV(pairs)


def is_normalized(pairs: Iterable[Tuple[Hashable, complex]],
                  tol: float = TOLERANCE, budget: int = BUDGET) -> bool:
    """Truncated normalization check over at most ``budget`` pairs.

    Reading another pair fails once the running sum of ``|amp|**2`` has
    passed ``1 + tol``. Otherwise the check succeeds if the sum is above
    ``1 - tol`` when the pairs run out or when ``budget`` pairs have been
    read. The sum is not bounded above at either exit, so an overshoot on the
    last pair read is accepted. A sequence still going after ``budget``
    entries is judged on its prefix alone; the tail is never inspected.
    """
    acc = 0.0
    it = iter(pairs)
    for _ in range(budget):
        try:
            _, amp = next(it)
        except StopIteration:
            return acc > 1 - tol
        if acc > 1 + tol:
            return False
        acc += abs(amp) ** 2
    return abs(acc) > 1 - tol


def q_vector(pairs: Iterable[Tuple[Hashable, complex]],
             tol: float = TOLERANCE, budget: int = BUDGET) -> QV:
    """Build a quantum vector, raising :class:`NormalizationError` unless it is normalized."""
    qv = unchecked_q_vector(pairs)
    if not is_normalized(qv, tol=tol, budget=budget):
        logger.debug("rejecting lazy vector after inspecting up to %d entries", budget)
        raise NormalizationError()
    return qv


def lookup(key: K, pairs: Iterable[Tuple[K, V]], limit: Optional[int] = None) -> Optional[V]:
    """Value of the first pair whose key equals ``key``, or None.

    With ``limit`` set, only the first ``limit`` pairs are searched.
    """
    for k, v in itertools.islice(pairs, limit):
        if k == key:
            return v
    return None


def amplitude(qv: Iterable[Tuple[Hashable, complex]], element, limit: Optional[int] = None) -> complex:
    """Amplitude of the first entry for ``element``; 0 if none is found.

    On an infinite vector a miss only returns when ``limit`` is given.
    """
    found = lookup(element, qv, limit=limit)
    return 0j if found is None else found


def q_integer() -> QV:
    """Infinite vector over the positive integers with amplitude 1/sqrt(2**i) at i.

    The squared amplitudes form the series 1/2 + 1/4 + ..., which sums to 1.
    """
    return q_vector((i, 2.0 ** (-0.5 * i)) for i in itertools.islice(basis(int), 1, None))
