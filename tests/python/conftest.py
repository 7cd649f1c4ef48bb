"""
Pytest configuration and shared fixtures for vecmath tests.
"""

import pytest
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from vecmath import Matrix, MatrixDimension, Vector


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def m23():
    """2 x 3 matrix with m[i, j] = i * 3 + j + 1.

    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return Matrix(MatrixDimension(2, 3), lambda i, j: float(i * 3 + j + 1))


@pytest.fixture
def n34():
    """3 x 4 matrix used for matrix products.

    Matrix:
    [[-3.0, 1.5,  0.5, 2.5],
     [ 7.5, 3.5, -2.0, 6.0],
     [-5.0, 4.0, -1.5, 8.0]]
    """
    return Matrix.from_rows([
        [-3.0, 1.5, 0.5, 2.5],
        [7.5, 3.5, -2.0, 6.0],
        [-5.0, 4.0, -1.5, 8.0],
    ])


@pytest.fixture
def v3():
    """Vector [1.0 2.0 3.0]."""
    return Vector(1.0, 2.0, 3.0)
