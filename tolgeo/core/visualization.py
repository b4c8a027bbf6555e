"""Diagnostic plots for intersection searches and circle fits."""
from __future__ import annotations

import os as _os
from typing import Sequence, Tuple

import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .logging_utils import get_logger
from .primitives import Point2D, as_evaluator, as_points_array

logger = get_logger('tolgeo.viz')

__all__ = ['plot_intersections', 'plot_circle_fit']


def _trace(curve, t_range: Tuple[float, float], samples: int) -> np.ndarray:
    ev = as_evaluator(curve)
    ts = np.linspace(float(t_range[0]), float(t_range[1]), samples)
    return np.array([tuple(ev.evaluate(float(t))) for t in ts], dtype=np.float64)


def plot_intersections(curve1, curve2, t1_range, t2_range, candidates: Sequence,
                       outname: str = 'intersections.png', samples: int = 400) -> str:
    """Draw both curves and mark each IntersectionCandidate; returns the output path."""
    xy1 = _trace(curve1, t1_range, samples)
    xy2 = _trace(curve2, t2_range, samples)
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(xy1[:, 0], xy1[:, 1], color=(0.2, 0.4, 0.85), linewidth=1.4, label='curve 1')
    ax.plot(xy2[:, 0], xy2[:, 1], color=(0.2, 0.65, 0.3), linewidth=1.4, label='curve 2')
    if candidates:
        px = [c.point.x for c in candidates]
        py = [c.point.y for c in candidates]
        ax.scatter(px, py, color=(0.85, 0.2, 0.2), zorder=3, s=30, label='intersections')
        for c in candidates:
            ax.annotate(f"t={c.parameter:.4g}", (c.point.x, c.point.y),
                        textcoords='offset points', xytext=(5, 5), fontsize=8)
    ax.set_aspect('equal', adjustable='datalim')
    ax.legend(loc='best', fontsize=8)
    ax.set_title(f"{len(candidates)} intersection(s)")
    fig.savefig(outname, dpi=120, bbox_inches='tight')
    plt.close(fig)
    logger.info("Wrote intersection plot to %s", outname)
    return outname


def plot_circle_fit(points, center: Point2D, radius: float,
                    outname: str = 'circle_fit.png') -> str:
    """Scatter the input points over the fitted circle; returns the output path."""
    pts = as_points_array(points)
    theta = np.linspace(0.0, 2.0 * np.pi, 361)
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(center.x + radius * np.cos(theta), center.y + radius * np.sin(theta),
            color=(0.2, 0.4, 0.85), linewidth=1.4)
    ax.scatter(pts[:, 0], pts[:, 1], color=(0.85, 0.2, 0.2), s=16, zorder=3)
    ax.plot([center.x], [center.y], marker='+', color='k')
    ax.set_aspect('equal', adjustable='datalim')
    ax.set_title(f"center=({center.x:.4g}, {center.y:.4g}) r={radius:.4g}")
    fig.savefig(outname, dpi=120, bbox_inches='tight')
    plt.close(fig)
    logger.info("Wrote circle fit plot to %s", outname)
    return outname
