"""Eager quantum vectors backed by a unique-keyed mapping.

Construction folds the supplied pairs into a dict, so when a basis element
appears twice the later amplitude wins, and normalization is checked on what
remains.
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Iterator, Mapping, Tuple, Union

from .apply_serial import as_amplitudes, norm2_serial
from .errors import NormalizationError

logger = logging.getLogger(__name__)

TOLERANCE = 1e-9

PA = complex  # probability amplitude
Pairs = Union[Mapping[Hashable, PA], Iterable[Tuple[Hashable, PA]]]


def norm2(amps: Iterable[PA], backend: str = "serial") -> float:
    psi = as_amplitudes(amps)
    if backend == "serial":
        return norm2_serial(psi)
    elif backend == "numba":
        try:
            from .apply_numba import norm2_numba
        except Exception as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        return norm2_numba(psi)
    raise NotImplementedError(f"Unknown backend: {backend}")


def is_normalized(m: Mapping[Hashable, PA], tol: float = TOLERANCE, backend: str = "serial") -> bool:
    """True when the squared magnitudes of ``m``'s amplitudes sum to 1 within ``tol``.

    An empty mapping sums to 0 and is never normalized.
    """
    return abs(norm2(m.values(), backend=backend) - 1.0) < tol


@dataclass(frozen=True)
class QV:
    """Immutable quantum vector: basis element -> probability amplitude."""
    amplitudes: Mapping[Hashable, PA] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "amplitudes", MappingProxyType(dict(self.amplitudes)))

    def __len__(self) -> int:
        return len(self.amplitudes)

    def __iter__(self) -> Iterator:
        return iter(self.amplitudes)

    def __contains__(self, element) -> bool:
        return element in self.amplitudes

    def items(self):
        return self.amplitudes.items()

    def amplitude(self, element) -> PA:
        return amplitude(self, element)


def q_vector(pairs: Pairs, tol: float = TOLERANCE, backend: str = "serial") -> QV:
    """Build a normalized quantum vector from ``pairs``.

    ``pairs`` may be a mapping or an iterable of ``(element, amplitude)``
    tuples. Raises :class:`NormalizationError` if the result is not normalized.
    """
    if isinstance(pairs, (Mapping, QV)):
        pairs = pairs.items()
    folded: Dict[Hashable, PA] = {k: complex(v) for k, v in pairs}
    n2 = norm2(folded.values(), backend=backend)
    if not abs(n2 - 1.0) < tol:
        logger.debug("rejecting %d-entry vector: sum |amp|^2 = %r", len(folded), n2)
        raise NormalizationError()
    return QV(folded)


def amplitude(qv: QV, element) -> PA:
    """Amplitude of ``element`` in ``qv``; 0 if the element is absent."""
    return qv.amplitudes.get(element, 0j)
