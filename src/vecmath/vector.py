"""
Vector - 1-D value type over a pluggable storage.

A Vector never touches memory directly: every element access is forwarded
to its storage. Whether two vectors share data is decided entirely by the
storage they wrap (dense owning storage, or a view onto a matrix row or
column).

Semantics:
    - Binary operators (+ - * /) allocate a new dense vector.
    - Augmented operators (+= -= *= /=) mutate through the storage, so on a
      view they mutate the owner.
    - Indices are checked against [0, dimension); negative indices are
      rejected rather than counted from the end.

Example:
    >>> v = Vector(3.0, 4.0)
    >>> v.magnitude
    5.0
    >>> v += 1.0
    >>> print(v)
    [4.0 5.0]
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Callable, Iterable, TYPE_CHECKING

import numpy as np

from ._dense import DenseVectorStorage, DTypeLike
from ._errors import DimensionMismatchError, IterationExhaustedError, check_index
from ._storage import Ownership, VectorStorage

if TYPE_CHECKING:
    from .matrix import Matrix

__all__ = ['Vector', 'VectorIterator', 'dot']

logger = logging.getLogger("vecmath.vector")


class Vector:
    """
    Dense vector of floats backed by a VectorStorage.

    Construction:
        Vector(1.0, 2.0, 3.0)            # from elements
        Vector.zeros(3)                  # zero-filled
        Vector.generate(3, lambda k: k)  # generator, called once per index
        Vector.wrap(storage)             # over an existing storage (views)

    Attributes:
        dimension (int): Number of elements
        indices (range): Valid indices, range(dimension)
        dtype (np.dtype): Element dtype of the storage
        ownership (Ownership): OWNED for dense storage, VIEW for aliases
    """

    __slots__ = ('_storage', '__weakref__')

    # Let numpy scalars defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, *elements: float, dtype: DTypeLike = None):
        self._storage: VectorStorage = DenseVectorStorage.from_values(elements, dtype)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def wrap(cls, storage: VectorStorage) -> 'Vector':
        """Create a vector over ``storage`` without copying it."""
        vector = cls.__new__(cls)
        vector._storage = storage
        return vector

    @classmethod
    def zeros(cls, dimension: int, dtype: DTypeLike = None) -> 'Vector':
        """Zero-filled vector of the given dimension."""
        return cls.wrap(DenseVectorStorage(dimension, dtype=dtype))

    @classmethod
    def generate(cls, dimension: int, init: Callable[[int], float], dtype: DTypeLike = None) -> 'Vector':
        """Vector whose element k is ``init(k)``."""
        return cls.wrap(DenseVectorStorage(dimension, init, dtype))

    @classmethod
    def from_list(cls, values: Iterable[float], dtype: DTypeLike = None) -> 'Vector':
        """Vector holding a copy of ``values``."""
        return cls.wrap(DenseVectorStorage.from_values(values, dtype))

    @classmethod
    def from_numpy(cls, arr: np.ndarray, dtype: DTypeLike = None) -> 'Vector':
        """Vector holding a copy of a 1-D numpy array."""
        return cls.wrap(DenseVectorStorage.from_array(arr, dtype))

    def copy(self) -> 'Vector':
        """Independent vector with the same elements, in fresh dense storage."""
        logger.debug(f"Copying vector of dimension {self.dimension} ({self.ownership.value})")
        storage = self._storage
        return Vector.generate(self.dimension, storage.get, dtype=storage.dtype)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def storage(self) -> VectorStorage:
        return self._storage

    @property
    def dimension(self) -> int:
        return self._storage.dimension

    @property
    def indices(self) -> range:
        return range(self._storage.dimension)

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def ownership(self) -> Ownership:
        return self._storage.ownership

    @property
    def is_view(self) -> bool:
        return self._storage.ownership == Ownership.VIEW

    def __len__(self) -> int:
        return self._storage.dimension

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def get(self, k: int) -> float:
        """Element at k. Raises IndexOutOfRangeError outside [0, dimension)."""
        return self._storage.get(check_index(k, self._storage.dimension))

    def set(self, k: int, value: float) -> None:
        """Overwrite element at k. Raises IndexOutOfRangeError outside [0, dimension)."""
        self._storage.set(check_index(k, self._storage.dimension), value)

    def __getitem__(self, k: int) -> float:
        return self.get(k)

    def __setitem__(self, k: int, value: float) -> None:
        self.set(k, value)

    def __iter__(self) -> 'VectorIterator':
        return VectorIterator(self)

    def tolist(self) -> list:
        return [self._storage.get(k) for k in self.indices]

    def to_numpy(self) -> np.ndarray:
        """Copy of the elements as a 1-D numpy array."""
        return np.array(self.tolist(), dtype=self.dtype)

    # -------------------------------------------------------------------------
    # Unary Operators
    # -------------------------------------------------------------------------

    def __pos__(self) -> 'Vector':
        return self

    def __neg__(self) -> 'Vector':
        storage = self._storage
        return Vector.generate(self.dimension, lambda k: -storage.get(k), dtype=storage.dtype)

    # -------------------------------------------------------------------------
    # Binary Operators (new value)
    # -------------------------------------------------------------------------

    def _map(self, fn: Callable[[float], float]) -> 'Vector':
        storage = self._storage
        return Vector.generate(self.dimension, lambda k: fn(storage.get(k)), dtype=storage.dtype)

    def _zip(self, other: 'Vector', fn: Callable[[float, float], float], op: str) -> 'Vector':
        self._check_same_dimension(other, op)
        a, b = self._storage, other._storage
        dtype = np.result_type(a.dtype, b.dtype)
        return Vector.generate(self.dimension, lambda k: fn(a.get(k), b.get(k)), dtype=dtype)

    def __add__(self, other):
        if isinstance(other, Vector):
            return self._zip(other, lambda x, y: x + y, "add")
        if isinstance(other, numbers.Real):
            return self._map(lambda x: x + other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, numbers.Real):
            return self + other
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector):
            return self._zip(other, lambda x, y: x - y, "subtract")
        if isinstance(other, numbers.Real):
            return self._map(lambda x: x - other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return self._map(lambda x: x * other)
        from .matrix import Matrix
        if isinstance(other, Matrix):
            return self.times_matrix(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, numbers.Real):
            divisor = np.float64(other)
            # IEEE semantics: x / 0 is +-inf or nan
            with np.errstate(divide="ignore", invalid="ignore"):
                return self._map(lambda x: float(np.float64(x) / divisor))
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Vector):
            return self.dot(other)
        from .matrix import Matrix
        if isinstance(other, Matrix):
            return self.times_matrix(other)
        return NotImplemented

    # -------------------------------------------------------------------------
    # Augmented Operators (in place)
    # -------------------------------------------------------------------------

    def _update(self, fn: Callable[[float], float]) -> None:
        storage = self._storage
        for k in range(storage.dimension):
            storage.set(k, fn(storage.get(k)))

    def _update_with(self, other: 'Vector', fn: Callable[[float, float], float], op: str) -> None:
        self._check_same_dimension(other, op)
        a, b = self._storage, other._storage
        for k in range(a.dimension):
            a.set(k, fn(a.get(k), b.get(k)))

    def __iadd__(self, other):
        if isinstance(other, Vector):
            self._update_with(other, lambda x, y: x + y, "add")
        elif isinstance(other, numbers.Real):
            self._update(lambda x: x + other)
        else:
            return NotImplemented
        return self

    def __isub__(self, other):
        if isinstance(other, Vector):
            self._update_with(other, lambda x, y: x - y, "subtract")
        elif isinstance(other, numbers.Real):
            self._update(lambda x: x - other)
        else:
            return NotImplemented
        return self

    def __imul__(self, other):
        if isinstance(other, numbers.Real):
            self._update(lambda x: x * other)
            return self
        return NotImplemented

    def __itruediv__(self, other):
        if isinstance(other, numbers.Real):
            divisor = np.float64(other)
            with np.errstate(divide="ignore", invalid="ignore"):
                self._update(lambda x: float(np.float64(x) / divisor))
            return self
        return NotImplemented

    # -------------------------------------------------------------------------
    # Products and Norms
    # -------------------------------------------------------------------------

    def dot(self, other: 'Vector') -> float:
        """Sum of elementwise products. Dimensions must match."""
        self._check_same_dimension(other, "take dot product of")
        a, b = self._storage, other._storage
        total = 0.0
        for k in range(a.dimension):
            total += a.get(k) * b.get(k)
        return total

    @property
    def magnitude(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> 'Vector':
        """This vector divided by its magnitude.

        A zero vector yields nan elements; this is not treated as an error.
        """
        return self / self.magnitude

    def times_matrix(self, matrix: 'Matrix') -> 'Vector':
        """Row-vector product ``self * matrix``, a vector of dimension cols."""
        rows, cols = matrix.dimension
        if self.dimension != rows:
            raise DimensionMismatchError(
                f"Cannot multiply vector of dimension {self.dimension} by {rows} x {cols} matrix"
            )
        v, m = self._storage, matrix.storage

        def column_sum(j: int) -> float:
            total = 0.0
            for i in range(rows):
                total += v.get(i) * m.get(i, j)
            return total

        return Vector.generate(cols, column_sum, dtype=np.result_type(v.dtype, m.dtype))

    def _check_same_dimension(self, other: 'Vector', op: str) -> None:
        if other.dimension != self.dimension:
            raise DimensionMismatchError(
                f"Cannot {op} vectors of dimension {self.dimension} and {other.dimension}"
            )

    # -------------------------------------------------------------------------
    # Equality and Representation
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        # No identity shortcut: a vector holding nan is unequal to itself
        if not isinstance(other, Vector):
            return NotImplemented
        if other.dimension != self.dimension:
            return False
        a, b = self._storage, other._storage
        return all(a.get(k) == b.get(k) for k in range(a.dimension))

    def __hash__(self) -> int:
        # Sum of element hashes: order-insensitive, collides for permutations
        storage = self._storage
        return sum(hash(storage.get(k)) for k in range(storage.dimension))

    def __str__(self) -> str:
        return '[' + ' '.join(str(e) for e in self.tolist()) + ']'

    def __repr__(self) -> str:
        if self.is_view:
            return f"Vector({self}, view)"
        return f"Vector({self})"


class VectorIterator:
    """
    Iterator over a vector's elements in index order.

    Each element is read when it is reached, so mutations made during
    iteration are visible. Advancing past the end raises
    IterationExhaustedError (an IndexOutOfRangeError and a StopIteration)
    carrying the first invalid index.
    Because it is also a StopIteration, ``next(it, default)`` returns
    ``default`` at the end instead of raising.
    """

    __slots__ = ('_vector', '_k')

    def __init__(self, vector: Vector):
        self._vector = vector
        self._k = 0

    def has_next(self) -> bool:
        return self._k < self._vector.dimension

    def __iter__(self) -> 'VectorIterator':
        return self

    def __next__(self) -> float:
        k = self._k
        if k >= self._vector.dimension:
            raise IterationExhaustedError(k)
        self._k = k + 1
        return self._vector.storage.get(k)


def dot(a: Vector, b: Vector) -> float:
    """Dot product of two vectors of equal dimension."""
    return a.dot(b)

