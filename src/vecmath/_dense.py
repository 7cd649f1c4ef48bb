"""
Dense Owning Storage

Contiguous numpy buffers implementing VectorStorage and MatrixStorage.

Memory Layout:
    - Vector: one buffer of length ``dimension``, element k at offset k
    - Matrix: one buffer of length ``rows * cols``, row-major,
              element (i, j) at offset ``i * cols + j``

Generators passed at construction are evaluated exactly once per element,
in index order (row-major for matrices).
"""

from typing import Callable, Iterable, Optional, Union

import numpy as np

from ._config import RealType, _resolve_dtype
from ._errors import check_dimension, InvalidArgumentError
from ._storage import MatrixDimension, MatrixStorage, Ownership, VectorStorage

__all__ = ['DenseVectorStorage', 'DenseMatrixStorage']

DTypeLike = Optional[Union[RealType, str, np.dtype, type]]


class DenseVectorStorage(VectorStorage):
    """
    Owning vector storage over a private 1-D buffer.

    Example:
        >>> s = DenseVectorStorage(3, lambda k: k * 0.5)
        >>> s.get(2)
        1.0
    """

    __slots__ = ('_data',)

    def __init__(
        self,
        dimension: int,
        init: Optional[Callable[[int], float]] = None,
        dtype: DTypeLike = None
    ):
        """
        Allocate zero-filled storage, optionally filled by ``init(k)``.

        Args:
            dimension: Number of elements (non-negative)
            init: Generator called once per index, in order
            dtype: float32/float64; None means float64
        """
        dimension = check_dimension(dimension)
        self._data = np.zeros(dimension, dtype=_resolve_dtype(dtype))
        if init is not None:
            for k in range(dimension):
                self._data[k] = init(k)

    @classmethod
    def from_values(cls, values: Iterable[float], dtype: DTypeLike = None) -> 'DenseVectorStorage':
        """Create storage holding a copy of ``values``."""
        values = list(values)
        return cls(len(values), values.__getitem__, dtype)

    @classmethod
    def from_array(cls, arr: np.ndarray, dtype: DTypeLike = None) -> 'DenseVectorStorage':
        """Create storage holding a copy of a 1-D array.

        The copy is float64 unless ``dtype`` asks for float32, whatever the
        dtype of ``arr``.
        """
        arr = np.asarray(arr)
        if arr.ndim != 1:
            raise InvalidArgumentError(f"Expected a 1-D array, got {arr.ndim}-D")
        storage = cls.__new__(cls)
        storage._data = np.array(arr, dtype=_resolve_dtype(dtype), copy=True)
        return storage

    @property
    def dimension(self) -> int:
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    def get(self, k: int) -> float:
        return self._data[k].item()

    def set(self, k: int, value: float) -> None:
        self._data[k] = value

    def to_numpy(self) -> np.ndarray:
        """Copy of the underlying buffer."""
        return self._data.copy()


class DenseMatrixStorage(MatrixStorage):
    """
    Owning matrix storage over a private row-major buffer.

    Example:
        >>> s = DenseMatrixStorage(MatrixDimension(2, 3), lambda i, j: i * 3 + j)
        >>> s.get(1, 0)
        3.0
    """

    __slots__ = ('_dimension', '_data')

    def __init__(
        self,
        dimension: MatrixDimension,
        init: Optional[Callable[[int, int], float]] = None,
        dtype: DTypeLike = None
    ):
        """
        Allocate zero-filled storage, optionally filled by ``init(i, j)``.

        Args:
            dimension: Matrix dimension
            init: Generator called once per cell, row-major order
            dtype: float32/float64; None means float64
        """
        self._dimension = dimension
        self._data = np.zeros(dimension.size, dtype=_resolve_dtype(dtype))
        if init is not None:
            cols = dimension.cols
            for offset in range(dimension.size):
                self._data[offset] = init(offset // cols, offset % cols)

    @classmethod
    def from_array(cls, arr: np.ndarray, dtype: DTypeLike = None) -> 'DenseMatrixStorage':
        """Create storage holding a copy of a 2-D array.

        The copy is float64 unless ``dtype`` asks for float32, whatever the
        dtype of ``arr``.
        """
        arr = np.asarray(arr)
        if arr.ndim != 2:
            raise InvalidArgumentError(f"Expected a 2-D array, got {arr.ndim}-D")
        storage = cls.__new__(cls)
        storage._dimension = MatrixDimension(arr.shape[0], arr.shape[1])
        # ravel() on a C-ordered copy gives the row-major layout
        storage._data = np.array(arr, dtype=_resolve_dtype(dtype), order='C', copy=True).ravel()
        return storage

    @property
    def dimension(self) -> MatrixDimension:
        return self._dimension

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNED

    def get(self, i: int, j: int) -> float:
        return self._data[i * self._dimension.cols + j].item()

    def set(self, i: int, j: int, value: float) -> None:
        self._data[i * self._dimension.cols + j] = value

    def to_numpy(self) -> np.ndarray:
        """Copy of the buffer reshaped to (rows, cols)."""
        return self._data.reshape(self._dimension.rows, self._dimension.cols).copy()
