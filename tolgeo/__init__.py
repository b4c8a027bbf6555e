"""Public package API for the tolgeo numerical geometry engine.

This facade provides a stable, flatter import surface on top of the
internal implementation package ``tolgeo.core`` while deferring the
matplotlib-backed plotting module until first use to keep ``import tolgeo``
fast.

Example
-------
    from tolgeo import CurveIntersection, CircleCurve, ToleranceContext

    finder = CurveIntersection(ToleranceContext.standard())
    hits = finder.find_intersections(CircleCurve((0, 0), 1), CircleCurve((1, 0), 1),
                                     (0, 6.283185307179586), (0, 6.283185307179586))

The deeper modules (``tolgeo.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("tolgeo")
except Exception:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_const = _imp('tolgeo.core.constants')
_tol = _imp('tolgeo.core.tolerance')
_err = _imp('tolgeo.core.errors')
_prim = _imp('tolgeo.core.primitives')
_conf = _imp('tolgeo.core.config')
_newton = _imp('tolgeo.core.newton')
_inter = _imp('tolgeo.core.intersection')
_integ = _imp('tolgeo.core.integration')
_fit = _imp('tolgeo.core.fitting')
_samp = _imp('tolgeo.core.sampling')
_stats = _imp('tolgeo.core.stats')
_logu = _imp('tolgeo.core.logging_utils')


def _lazy_module(mod_name):
    class _ModuleProxy:
        __slots__ = ('_m',)

        def _load(self):
            try:
                return self._m
            except AttributeError:
                self._m = _imp(mod_name)
                return self._m

        def __getattr__(self, item):
            if item == '_m':  # unset slot; keep _load() from recursing
                raise AttributeError(item)
            return getattr(self._load(), item)

        def __dir__(self):
            return dir(self._load())
    return _ModuleProxy()


# matplotlib import is deferred
visualization = _lazy_module('tolgeo.core.visualization')

# Tolerances and configuration
ToleranceContext = _tol.ToleranceContext
IntersectionConfig = _conf.IntersectionConfig
SolverConfig = _conf.SolverConfig
EngineConfig = _conf.EngineConfig

# Value types and curve adapters
Point2D = _prim.Point2D
Vector2 = _prim.Vector2
CurveEvaluator = _prim.CurveEvaluator
FunctionCurve = _prim.FunctionCurve
CircleCurve = _prim.CircleCurve
LineCurve = _prim.LineCurve
as_evaluator = _prim.as_evaluator

# Solvers and entry points
ConvergenceInfo = _newton.ConvergenceInfo
NewtonSolver = _newton.NewtonSolver
CurveIntersection = _inter.CurveIntersection
IntersectionCandidate = _inter.IntersectionCandidate
LeastSquaresFitter = _fit.LeastSquaresFitter
AdaptiveSampler = _samp.AdaptiveSampler
MonteCarloSampler = _samp.MonteCarloSampler
SearchStats = _stats.SearchStats
arc_length = _integ.arc_length

# Errors
GeometryError = _err.GeometryError
DerivativeTooSmall = _err.DerivativeTooSmall
SingularJacobian = _err.SingularJacobian
DegeneratePointSet = _err.DegeneratePointSet
InsufficientPoints = _err.InsufficientPoints
NegativeRadiusSquared = _err.NegativeRadiusSquared
NonConvergence = _err.NonConvergence

# Logging
get_logger = _logu.get_logger
configure_logging = _logu.configure_logging

# Namespace submodules for exploratory users
constants = _const
tolerance = _tol
errors = _err
primitives = _prim
config = _conf
newton = _newton
intersection = _inter
integration = _integ
fitting = _fit
sampling = _samp
stats = _stats

__all__ = [
    '__version__',
    # tolerances / configuration
    'ToleranceContext', 'IntersectionConfig', 'SolverConfig', 'EngineConfig',
    # value types
    'Point2D', 'Vector2', 'CurveEvaluator', 'FunctionCurve', 'CircleCurve', 'LineCurve', 'as_evaluator',
    # solvers
    'ConvergenceInfo', 'NewtonSolver', 'CurveIntersection', 'IntersectionCandidate',
    'LeastSquaresFitter', 'AdaptiveSampler', 'MonteCarloSampler', 'SearchStats', 'arc_length',
    # errors
    'GeometryError', 'DerivativeTooSmall', 'SingularJacobian', 'DegeneratePointSet',
    'InsufficientPoints', 'NegativeRadiusSquared', 'NonConvergence',
    # logging
    'get_logger', 'configure_logging',
    # submodules / namespaces
    'constants', 'tolerance', 'errors', 'primitives', 'config', 'newton', 'intersection',
    'integration', 'fitting', 'sampling', 'stats', 'visualization',
]
