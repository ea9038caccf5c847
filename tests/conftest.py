"""Pytest configuration and shared fixtures."""
from pathlib import Path

import numpy as np
import pytest
from fixtures.counting_kernel import CountingKernel

from src.domain.entities.matrix import Matrix, Order

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def counting_kernel():
    """
    Provide a CountingKernel instance for tests.

    Returns:
        CountingKernel: A new kernel with its call counter at zero.
    """
    return CountingKernel()


@pytest.fixture
def rng():
    """
    Provide a seeded random generator so randomized tests are reproducible.

    Returns:
        np.random.Generator: Generator seeded with a fixed value.
    """
    return np.random.default_rng(20180607)


@pytest.fixture
def fixtures_dir():
    """
    Provide the directory holding the dataset and configuration fixtures.

    Returns:
        Path: Absolute path of tests/fixtures.
    """
    return FIXTURES_DIR


@pytest.fixture
def matrix_1_to_9():
    """
    Provide the 3x3 row-major matrix [[1,2,3],[4,5,6],[7,8,9]].

    Returns:
        Matrix: A new matrix.
    """
    return Matrix.from_buffer(Order.ROW_MAJOR, range(1, 10), 3, 3)


@pytest.fixture
def matrix_1_to_6():
    """
    Provide the 3x2 row-major matrix [[1,2],[3,4],[5,6]].

    Returns:
        Matrix: A new matrix.
    """
    return Matrix.from_buffer(Order.ROW_MAJOR, range(1, 7), 3, 2)
