"""Pytest configuration for sphereview tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import io

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Fast math is off so
    divisions by zero keep their IEEE results.
    """
    ti.init(arch=ti.cpu, fast_math=False, random_seed=42)
    yield


@pytest.fixture
def terminal_output():
    """In-memory output stream standing in for the terminal."""
    return io.StringIO()


@pytest.fixture
def small_params():
    """Scene parameters for a 64x40 grid; the 16:9 viewport is 64x36."""
    from src.sphereview.scene.params import SceneParams

    return SceneParams(width=64, height=40)
