"""Tests for ToleranceContext presets and derived contexts."""
import dataclasses

import pytest

from tolgeo.core.tolerance import ToleranceContext

PRESETS = [ToleranceContext.high_precision, ToleranceContext.standard, ToleranceContext.low_precision]


def test_presets_are_monotonically_ordered():
    high, std, low = (p() for p in PRESETS)
    assert high.linear < std.linear < low.linear
    assert high.angular < std.angular < low.angular
    assert high.parametric < std.parametric < low.parametric


def test_default_is_standard():
    assert ToleranceContext.default() == ToleranceContext.standard()


@pytest.mark.parametrize("preset", PRESETS)
def test_all_fields_positive(preset):
    tol = preset()
    for f in dataclasses.fields(tol):
        assert getattr(tol, f.name) > 0


def test_contexts_are_immutable():
    tol = ToleranceContext.standard()
    with pytest.raises(dataclasses.FrozenInstanceError):
        tol.linear = 1.0


@pytest.mark.parametrize("bad", [0.0, -1e-6, float('nan'), float('inf')])
def test_non_positive_or_non_finite_values_rejected(bad):
    with pytest.raises(ValueError):
        ToleranceContext(bad, 1e-8, 1e-10, 1e-3, 1e-12, 1e-18)


def test_bool_is_not_a_tolerance():
    with pytest.raises(ValueError):
        ToleranceContext(1e-6, 1e-8, 1e-10, True, 1e-12, 1e-18)


class TestScaled:

    def test_dimensional_scaling(self):
        base = ToleranceContext.standard()
        s = base.scaled(10.0)
        assert s.linear == pytest.approx(base.linear * 10.0)
        assert s.area == pytest.approx(base.area * 100.0)
        assert s.volume == pytest.approx(base.volume * 1000.0)
        assert s.curvature == pytest.approx(base.curvature / 10.0)

    def test_angles_and_parameters_are_unit_free(self):
        base = ToleranceContext.standard()
        s = base.scaled(1000.0)
        assert s.angular == base.angular
        assert s.parametric == base.parametric

    def test_rejects_non_positive_factor(self):
        with pytest.raises(ValueError):
            ToleranceContext.standard().scaled(0.0)


class TestTightened:

    def test_every_field_shrinks(self):
        base = ToleranceContext.low_precision()
        t = base.tightened(0.5)
        for f in dataclasses.fields(base):
            assert getattr(t, f.name) == pytest.approx(getattr(base, f.name) * 0.5)

    @pytest.mark.parametrize("factor", [0.0, 1.5, -0.1])
    def test_factor_must_be_in_unit_interval(self, factor):
        with pytest.raises(ValueError):
            ToleranceContext.standard().tightened(factor)


def test_tolerant_comparisons():
    tol = ToleranceContext.standard()
    assert tol.tolerant_eq(1.0, 1.0 + 5e-7)
    assert not tol.tolerant_eq(1.0, 1.0 + 5e-6)
    assert tol.tolerant_cmp(1.0, 1.0 + 5e-7) == 0
    assert tol.tolerant_cmp(1.0, 2.0) == -1
    assert tol.tolerant_cmp(2.0, 1.0) == 1


def test_str_shows_main_tolerances():
    text = str(ToleranceContext.standard())
    assert 'linear: 1.00e-06' in text
    assert 'angular: 1.00e-08' in text
    assert 'parametric: 1.00e-10' in text
