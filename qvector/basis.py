"""Basis sets for the discrete types a quantum vector can be built over."""
import itertools
from enum import Enum
from functools import total_ordering
from typing import Callable, Dict, Iterable, Protocol, Type, Union, runtime_checkable


@runtime_checkable
class HasBasis(Protocol):
    @classmethod
    def basis(cls) -> Iterable: ...


@total_ordering
class _Element(Enum):
    # plain Enum: members never compare equal to the ints they wrap
    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value < other.value

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class Move(_Element):
    VERTICAL = 0
    HORIZONTAL = 1

    @classmethod
    def basis(cls):
        return [cls.VERTICAL, cls.HORIZONTAL]


class Rotation(_Element):
    CTR_CLOCKWISE = 0
    CLOCKWISE = 1

    @classmethod
    def basis(cls):
        return [cls.CTR_CLOCKWISE, cls.CLOCKWISE]


class Colour(_Element):
    RED = 0
    YELLOW = 1
    BLUE = 2

    @classmethod
    def basis(cls):
        return [cls.RED, cls.YELLOW, cls.BLUE]


# builtins can't carry a classmethod, so they live here
_REGISTRY: Dict[type, Callable[[], Iterable]] = {}
_FINITE: Dict[type, bool] = {}


def register_basis(tp: type, enumerator: Callable[[], Iterable], finite: bool = True):
    """Register the basis enumeration for a type that cannot define ``basis()``.

    ``enumerator`` is called on every lookup, so an unbounded generator starts
    over from its first element each time.
    """
    _REGISTRY[tp] = enumerator
    _FINITE[tp] = finite


register_basis(bool, lambda: [False, True])
register_basis(int, lambda: itertools.count(0), finite=False)


def basis(tp: Union[type, Type[HasBasis]]) -> Iterable:
    """Ordered basis elements of ``tp``."""
    if tp in _REGISTRY:
        return _REGISTRY[tp]()
    if isinstance(tp, HasBasis):
        return tp.basis()
    raise TypeError(f"No basis defined for type {tp!r}")


def is_finite(tp: Union[type, Type[HasBasis]]) -> bool:
    if tp in _REGISTRY:
        return _FINITE[tp]
    if isinstance(tp, HasBasis):
        return True
    raise TypeError(f"No basis defined for type {tp!r}")
