"""Central numerical tolerances and solver constants.

This module centralizes tiny numeric thresholds and heuristic defaults used
across the codebase so they can be tuned consistently and referenced without
scattering literals.
"""
from __future__ import annotations

# Newton refinement
FD_STEP: float = 1e-8                 # forward-difference step for Jacobian estimates
DEFAULT_MAX_ITERATIONS: int = 100     # Newton iteration cap

# Intersection search heuristics
DEFAULT_GRID_SIZE: int = 20           # lattice resolution per parameter axis
DEFAULT_SCREENING_FACTOR: float = 10.0  # seed kept when distance < factor * linear

# Vectors shorter than this have no direction
NORMALIZE_EPS: float = 1e-10

# Tolerance presets: (linear, angular, parametric, curvature, area, volume)
STANDARD_TOLERANCES = (1e-6, 1e-8, 1e-10, 1e-3, 1e-12, 1e-18)
HIGH_PRECISION_TOLERANCES = (1e-9, 1e-10, 1e-12, 1e-6, 1e-18, 1e-27)
LOW_PRECISION_TOLERANCES = (1e-3, 1e-6, 1e-8, 1e-1, 1e-6, 1e-9)

# Adaptive sampling
SAMPLER_MAX_RECURSION: int = 8
SAMPLER_MIN_SAMPLES: int = 10
SAMPLER_MAX_POINTS: int = 1000

# Arc-length quadrature
ARC_LENGTH_STEPS: int = 1000          # panels over the parameter interval

__all__ = [
    'FD_STEP',
    'DEFAULT_MAX_ITERATIONS',
    'DEFAULT_GRID_SIZE',
    'DEFAULT_SCREENING_FACTOR',
    'NORMALIZE_EPS',
    'STANDARD_TOLERANCES',
    'HIGH_PRECISION_TOLERANCES',
    'LOW_PRECISION_TOLERANCES',
    'SAMPLER_MAX_RECURSION',
    'SAMPLER_MIN_SAMPLES',
    'SAMPLER_MAX_POINTS',
    'ARC_LENGTH_STEPS',
]
