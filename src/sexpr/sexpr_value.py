"""S-expression value hierarchy - immutable tree types produced by the parser."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Tuple, TypeVar, Union


T = TypeVar('T')


class SExpr(ABC):
    """
    Abstract base class for all S-expression values.

    All S-expression values are immutable and compare structurally.
    """

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to the equivalent Python value."""

    @abstractmethod
    def type_name(self) -> str:
        """Return the type name used in messages."""

    def is_nil(self) -> bool:
        """Check if this is the nil atom."""
        return False

    def is_atom(self) -> bool:
        """Check if this is an atom (any non-list value)."""
        return False

    def is_list(self) -> bool:
        """Check if this is a list."""
        return False

    def map(self, transform: Callable[['SExpr'], T]) -> List[T]:
        """
        Map the content of the expression.

        An atom maps to a single item list.  A list maps each of its elements.
        """
        return [transform(self)]


class SExprAtom(SExpr):
    """Abstract base class for leaf values."""

    def is_atom(self) -> bool:
        return True


@dataclass(frozen=True)
class SExprNil(SExprAtom):
    """Represents the nil atom."""

    def to_python(self) -> None:
        return None

    def type_name(self) -> str:
        return "nil"

    def is_nil(self) -> bool:
        return True


@dataclass(frozen=True)
class SExprBool(SExprAtom):
    """Represents boolean values."""
    value: bool

    def to_python(self) -> bool:
        return self.value

    def type_name(self) -> str:
        return "boolean"


@dataclass(frozen=True)
class SExprString(SExprAtom):
    """Represents string values."""
    value: str

    def to_python(self) -> str:
        return self.value

    def type_name(self) -> str:
        return "string"


@dataclass(frozen=True)
class SExprSymbol(SExprAtom):
    """Represents identifier-like symbols."""
    name: str

    def to_python(self) -> str:
        return self.name

    def type_name(self) -> str:
        return "symbol"


@dataclass(frozen=True)
class SExprInteger(SExprAtom):
    """Represents integer values."""
    value: int

    def to_python(self) -> int:
        return self.value

    def type_name(self) -> str:
        return "integer"


@dataclass(frozen=True)
class SExprFloat(SExprAtom):
    """Represents floating point values (IEEE-754 double precision)."""
    value: float

    def to_python(self) -> float:
        return self.value

    def type_name(self) -> str:
        return "float"


@dataclass(frozen=True)
class SExprList(SExpr):
    """Represents an ordered, possibly empty, sequence of expressions."""
    elements: Tuple[SExpr, ...] = ()

    def to_python(self) -> List[Any]:
        return [elem.to_python() for elem in self.elements]

    def type_name(self) -> str:
        return "list"

    def is_list(self) -> bool:
        return True

    def is_empty(self) -> bool:
        """Check if the list has no elements."""
        return len(self.elements) == 0

    def map(self, transform: Callable[[SExpr], T]) -> List[T]:
        return [transform(elem) for elem in self.elements]

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[SExpr]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> SExpr:
        return self.elements[index]


PythonValue = Union[None, bool, int, float, str, list, tuple, SExpr]


def sexpr_from_python(value: PythonValue) -> SExpr:
    """
    Build an S-expression from a Python value.

    Python strings always become string atoms; use SExprSymbol directly to
    build symbols.

    Args:
        value: None, bool, int, float, str, a list or tuple of these, or an SExpr

    Returns:
        The equivalent S-expression

    Raises:
        TypeError: If the value has no S-expression equivalent
    """
    if isinstance(value, SExpr):
        return value

    if value is None:
        return SExprNil()

    # bool must be checked before int
    if isinstance(value, bool):
        return SExprBool(value)

    if isinstance(value, int):
        return SExprInteger(value)

    if isinstance(value, float):
        return SExprFloat(value)

    if isinstance(value, str):
        return SExprString(value)

    if isinstance(value, (list, tuple)):
        return SExprList(tuple(sexpr_from_python(elem) for elem in value))

    raise TypeError(f"Cannot convert {type(value).__name__} to an S-expression")
