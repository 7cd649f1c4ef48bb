"""
Global configuration for vecmath.

Provides:
- The storage precision used when no dtype is requested (always float64)
- Parsing of per-call dtype requests ('f64', 'f32', numpy dtypes)

float32 storage is a per-call opt-in (``dtype='f32'``). It rounds every
written value to single precision and overflows to inf above ~3.4e38, so
``get`` after ``set`` only returns the written value exactly for float64
storage. There is deliberately no process-wide switch to float32.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import numpy as np

from ._errors import InvalidArgumentError


# =============================================================================
# Precision Types
# =============================================================================

class RealType(Enum):
    """Real (floating-point) precision."""
    FLOAT32 = "f32"
    FLOAT64 = "f64"

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(np.float32) if self == RealType.FLOAT32 else np.dtype(np.float64)

    @classmethod
    def parse(cls, value: Union["RealType", str, np.dtype, type]) -> "RealType":
        """Accept a RealType, 'f32'/'f64', 'float32'/'float64' or a numpy dtype."""
        if isinstance(value, RealType):
            return value
        if isinstance(value, str):
            name = value.strip().lower()
            if name in ("f32", "float32", "single"):
                return cls.FLOAT32
            if name in ("f64", "float64", "double"):
                return cls.FLOAT64
            raise InvalidArgumentError(f"Unknown precision: {value!r}")
        try:
            dtype = np.dtype(value)
        except TypeError:
            raise InvalidArgumentError(f"Unknown precision: {value!r}") from None
        if dtype == np.float32:
            return cls.FLOAT32
        if dtype == np.float64:
            return cls.FLOAT64
        raise InvalidArgumentError(f"Unsupported dtype: {dtype}. Supported: float32, float64")


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Holds the precision used whenever dense storage is allocated without an
    explicit dtype. It is fixed to float64 so that stored values round-trip
    exactly unless a caller asks for float32.
    """

    def __init__(self):
        self._default_real = RealType.FLOAT64

    @property
    def default_real(self) -> RealType:
        """Get default real type."""
        return self._default_real


_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def get_precision() -> RealType:
    """Precision of dense storage allocated without a dtype (FLOAT64)."""
    return _config.default_real


# =============================================================================
# Internal Helpers
# =============================================================================

def _resolve_dtype(dtype: Optional[Union[RealType, str, np.dtype, type]] = None) -> np.dtype:
    """Return the numpy dtype for an explicit request or the default."""
    if dtype is None:
        return _config.default_real.numpy_dtype
    return RealType.parse(dtype).numpy_dtype
