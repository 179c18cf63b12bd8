"""
Enumerable capability.

An Enumerable type exposes two storage projections for each of its members,
an integer index and a string value, plus a factory that materializes a
member from either primitive:

    make(primitive) -> member      (classmethod/staticmethod)
    member.get_index() -> int
    member.get_value() -> str

Any class defining those three names satisfies Enumerable through structural
checks, the same way collections.abc treats Iterable. Classes can also be
registered explicitly with Enumerable.register().
"""
import enum
from abc import ABC, abstractmethod
from typing import Any, Self

__all__ = [
    'Enumerable',
    'IndexedEnum',
    'is_enumerable_class',
]

_CAPABILITY = ('make', 'get_index', 'get_value')


def _check_methods(C: type, *methods: str):
    mro = C.__mro__
    for method in methods:
        for base in mro:
            if method in base.__dict__:
                if base.__dict__[method] is None:
                    return NotImplemented
                break
        else:
            return NotImplemented
    return True


class Enumerable(ABC):
    """Capability implemented by every enum type an enum field can declare.
    """

    __slots__ = ()

    @classmethod
    @abstractmethod
    def make(cls, value: Any) -> 'Enumerable':
        """Materialize a member from an index, a value or a member.

        Raises when the primitive does not name a member.
        """

    @abstractmethod
    def get_index(self) -> int:
        """Integer projection used when the column is cast to an integer.
        """

    @abstractmethod
    def get_value(self) -> str:
        """Symbolic projection used for every other column.
        """

    @classmethod
    def __subclasshook__(cls, C):
        if cls is Enumerable:
            return _check_methods(C, *_CAPABILITY)
        return NotImplemented


def is_enumerable_class(obj: Any) -> bool:
    """Check if obj is a class implementing the Enumerable capability.
    """
    return isinstance(obj, type) and issubclass(obj, Enumerable)


class IndexedEnum(enum.Enum):
    """Standard library Enum satisfying the Enumerable capability.

    The index is the zero-based declaration position of a member, the value
    is ``str(member.value)``. ``make`` accepts a member, an index, or a string
    matching either a member value or a member name.

        class StatusEnum(IndexedEnum):
            Draft = 'Draft'
            Published = 'Published'

        StatusEnum.make(1) is StatusEnum.Published
        StatusEnum.make('Published').get_index() == 1
    """

    @classmethod
    def make(cls, value: Any) -> Self:
        if isinstance(value, cls):
            return value
        # bool is an int subclass but never a valid index
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f'{value!r} is not a valid index for {cls.__name__}')
        if isinstance(value, str):
            for member in cls:
                if member.get_value() == value:
                    return member
            if value in cls.__members__:
                return cls.__members__[value]
            raise ValueError(f'{value!r} is not a valid value for {cls.__name__}')
        raise ValueError(f'Cannot make {cls.__name__} from {type(value).__name__} {value!r}')

    def get_index(self) -> int:
        return list(type(self)).index(self)

    def get_value(self) -> str:
        return str(self.value)
