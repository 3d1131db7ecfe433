"""Tests for the jump rate interest model."""

import dataclasses

import pytest

from jumprate.data.constants import SCALE, STEPS_PER_YEAR
from jumprate.protocol.errors import ArithmeticOverflow, ArithmeticUnderflow, DivisionByZero
from jumprate.protocol.events import NewInterestParams, RecordingObserver
from jumprate.protocol.interest_rate import InterestRateModel, InterestRateParams

# 2% base, 10% slope, 100% jump slope, 80% kink
BASE = 2 * 10**16
SLOPE = 10**17
JUMP = 10**18
KINK = 8 * 10**17


@pytest.fixture
def model() -> InterestRateModel:
    """Model with one step per year, so per-step values equal annual ones."""
    return InterestRateModel(BASE, SLOPE, JUMP, KINK, steps_per_year=1, observer=RecordingObserver())


@pytest.fixture
def block_model() -> InterestRateModel:
    """Model using the default steps-per-year constant."""
    return InterestRateModel(0, 10**18, 10 * 10**18, KINK, observer=RecordingObserver())


class TestConstruction:
    def test_per_step_values_truncate(self, block_model: InterestRateModel) -> None:
        assert block_model.base_rate_per_step == 0
        assert block_model.slope_per_step == 475_646_879_756
        assert block_model.slope_per_step == 10**18 // STEPS_PER_YEAR
        assert block_model.jump_slope_per_step == 10 * 10**18 // STEPS_PER_YEAR

    def test_kink_is_not_converted(self, block_model: InterestRateModel) -> None:
        assert block_model.kink == KINK

    @pytest.mark.parametrize(
        "annual",
        [0, 1, STEPS_PER_YEAR - 1, STEPS_PER_YEAR, 7 * STEPS_PER_YEAR, 10**18, 123_456_789_012_345_678],
    )
    def test_annualization_never_gains(self, annual: int) -> None:
        m = InterestRateModel(annual, annual, annual, KINK, observer=RecordingObserver())
        for per_step in (m.base_rate_per_step, m.slope_per_step, m.jump_slope_per_step):
            assert per_step * STEPS_PER_YEAR <= annual
            assert annual - per_step * STEPS_PER_YEAR < STEPS_PER_YEAR
            if annual % STEPS_PER_YEAR == 0:
                assert per_step * STEPS_PER_YEAR == annual

    def test_emits_one_event(self) -> None:
        observer = RecordingObserver()
        InterestRateModel(BASE, SLOPE, JUMP, KINK, observer=observer)
        assert observer.events == [
            NewInterestParams(
                base_rate_per_step=BASE // STEPS_PER_YEAR,
                slope_per_step=SLOPE // STEPS_PER_YEAR,
                jump_slope_per_step=JUMP // STEPS_PER_YEAR,
                kink=KINK,
            )
        ]

    def test_parameters_are_read_only(self, model: InterestRateModel) -> None:
        with pytest.raises(AttributeError):
            model.slope_per_step = 1  # type: ignore[misc]
        with pytest.raises(AttributeError):
            model.extra = 1  # type: ignore[attr-defined]
        with pytest.raises(dataclasses.FrozenInstanceError):
            model.params.kink = 0  # type: ignore[misc]

    def test_private_state_cannot_be_replaced(self, model: InterestRateModel) -> None:
        with pytest.raises(AttributeError):
            model._params = InterestRateParams(0, 0, 0, 0)  # type: ignore[misc]
        with pytest.raises(AttributeError):
            model._steps_per_year = 2  # type: ignore[misc]
        with pytest.raises(AttributeError):
            del model._params
        assert model.params == InterestRateParams(BASE, SLOPE, JUMP, KINK)
        assert model.steps_per_year == 1


class TestUtilizationRate:
    def test_zero_borrows(self, model: InterestRateModel) -> None:
        assert model.utilization_rate(1_000, 0, 0) == 0
        assert model.utilization_rate(0, 0, 0) == 0
        # Borrows of zero short-circuit before the subtraction
        assert model.utilization_rate(100, 0, 200) == 0

    def test_half_utilized(self, model: InterestRateModel) -> None:
        assert model.utilization_rate(50, 50, 0) == 5 * 10**17

    def test_reserves_reduce_denominator(self, model: InterestRateModel) -> None:
        # 50 / (60 + 50 - 10) = 50%
        assert model.utilization_rate(60, 50, 10) == 5 * 10**17

    def test_truncates(self, model: InterestRateModel) -> None:
        assert model.utilization_rate(2, 1, 0) == 333_333_333_333_333_333

    def test_fully_utilized(self, model: InterestRateModel) -> None:
        assert model.utilization_rate(0, 10**24, 0) == SCALE

    def test_reserves_exceeding_assets_underflow(self, model: InterestRateModel) -> None:
        with pytest.raises(ArithmeticUnderflow):
            model.utilization_rate(100, 50, 200)

    def test_reserves_equal_to_assets(self, model: InterestRateModel) -> None:
        with pytest.raises(DivisionByZero):
            model.utilization_rate(0, 10, 10)

    def test_monotonic_in_borrows(self, model: InterestRateModel) -> None:
        prev = -1
        for borrows in range(0, 10_001, 250):
            util = model.utilization_rate(5_000, borrows, 100)
            assert util >= prev
            prev = util


class TestBorrowRate:
    def test_zero_borrows_is_base_rate(self, model: InterestRateModel) -> None:
        assert model.borrow_rate(1_000, 0, 0) == model.base_rate_per_step == BASE

    def test_below_kink(self, model: InterestRateModel) -> None:
        # 50% * 10% + 2%
        assert model.borrow_rate(50, 50, 0) == 7 * 10**16

    def test_at_kink(self, model: InterestRateModel) -> None:
        # 80% * 10% + 2%
        assert model.borrow_rate(20, 80, 0) == 10**17

    def test_above_kink(self, model: InterestRateModel) -> None:
        # 10% at the kink + 10% excess * 100%
        assert model.borrow_rate(10, 90, 0) == 2 * 10**17

    def test_fully_utilized(self, model: InterestRateModel) -> None:
        assert model.borrow_rate(0, 100, 0) == 3 * 10**17

    @pytest.mark.parametrize("d", [1, 10**9, 10**15, 10**17])
    def test_continuous_at_kink(self, block_model: InterestRateModel, d: int) -> None:
        m = block_model
        total = 10**18
        at_kink = m.borrow_rate(total - m.kink, m.kink, 0)
        assert at_kink == m.kink * m.slope_per_step // SCALE + m.base_rate_per_step

        # Just past the kink the jump branch adds only the excess term
        util = m.kink + d
        above = m.borrow_rate(total - util, util, 0)
        assert above - at_kink == d * m.jump_slope_per_step // SCALE

        below = m.borrow_rate(total - (m.kink - d), m.kink - d, 0)
        assert below <= at_kink <= above

    def test_kink_scenario(self, block_model: InterestRateModel) -> None:
        m = block_model
        at_kink = m.borrow_rate(2 * 10**17, 8 * 10**17, 0)
        assert at_kink == KINK * m.slope_per_step // SCALE == 380_517_503_804

        above = m.borrow_rate(10**17, 9 * 10**17, 0)
        assert above == at_kink + 10**17 * m.jump_slope_per_step // SCALE

    def test_monotonic_in_borrows(self, block_model: InterestRateModel) -> None:
        cash = 1_000 * 10**18
        prev = -1
        for step in range(0, 101):
            rate = block_model.borrow_rate(cash, step * 100 * 10**18, 10**18)
            assert rate >= prev
            prev = rate

    def test_zero_kink_uses_jump_slope_only(self) -> None:
        m = InterestRateModel(0, SLOPE, JUMP, 0, steps_per_year=1, observer=RecordingObserver())
        assert m.borrow_rate(50, 50, 0) == 5 * 10**17

    def test_overflow_is_detected(self) -> None:
        m = InterestRateModel(0, 2**255, 0, SCALE, steps_per_year=1, observer=RecordingObserver())
        with pytest.raises(ArithmeticOverflow):
            m.borrow_rate(50, 50, 0)

    def test_underflow_propagates(self, model: InterestRateModel) -> None:
        with pytest.raises(ArithmeticUnderflow):
            model.borrow_rate(100, 50, 200)


class TestSupplyRate:
    def test_zero_borrows(self, model: InterestRateModel) -> None:
        assert model.supply_rate(1_000, 0, 0, 10**17) == 0

    def test_formula(self, model: InterestRateModel) -> None:
        # 50% * 7% * (1 - 10%) = 3.15%
        assert model.supply_rate(50, 50, 0, 10**17) == 31_500_000_000_000_000

    def test_no_reserve_factor(self, model: InterestRateModel) -> None:
        # 50% * 7%
        assert model.supply_rate(50, 50, 0, 0) == 35 * 10**15

    def test_full_reserve_factor(self, model: InterestRateModel) -> None:
        assert model.supply_rate(10, 90, 0, SCALE) == 0

    def test_reserve_factor_above_scale(self, model: InterestRateModel) -> None:
        with pytest.raises(ArithmeticUnderflow):
            model.supply_rate(10, 90, 0, SCALE + 1)

    def test_less_than_borrow_rate(self, block_model: InterestRateModel) -> None:
        for borrows in (10, 50, 80, 99):
            cash = 100 - borrows
            supply = block_model.supply_rate(cash, borrows, 0, 15 * 10**16)
            assert supply < block_model.borrow_rate(cash, borrows, 0)


class TestRateCurve:
    def test_curve_shape(self, model: InterestRateModel) -> None:
        df = model.rate_curve(n_points=101)
        assert len(df) == 101
        assert list(df.columns) == [
            "utilization",
            "borrow_rate",
            "supply_rate",
            "borrow_apr",
            "supply_apr",
        ]
        assert df["utilization"].iloc[0] == pytest.approx(0.0)
        assert df["utilization"].iloc[-1] == pytest.approx(1.0)

    def test_curve_values(self, model: InterestRateModel) -> None:
        df = model.rate_curve(n_points=101)
        assert df["borrow_rate"].iloc[0] == BASE
        assert df["borrow_rate"].iloc[50] == 7 * 10**16
        assert df["borrow_rate"].iloc[80] == 10**17
        assert df["borrow_rate"].iloc[100] == 3 * 10**17
        assert df["supply_rate"].iloc[0] == 0
        assert df["borrow_apr"].iloc[100] == pytest.approx(0.3)
        assert df["borrow_rate"].is_monotonic_increasing

    def test_apr_uses_steps_per_year(self, block_model: InterestRateModel) -> None:
        df = block_model.rate_curve(n_points=11)
        expected = df["borrow_rate"].iloc[5] * STEPS_PER_YEAR / SCALE
        assert df["borrow_apr"].iloc[5] == pytest.approx(expected)
        assert df["borrow_apr"].iloc[5] == pytest.approx(0.5, rel=1e-5)

    def test_reserve_factor_lowers_supply(self, model: InterestRateModel) -> None:
        full = model.rate_curve(n_points=11)
        cut = model.rate_curve(n_points=11, reserve_factor=5 * 10**17)
        assert (cut["supply_rate"] <= full["supply_rate"]).all()
        assert cut["supply_rate"].iloc[-1] < full["supply_rate"].iloc[-1]

    def test_too_few_points(self, model: InterestRateModel) -> None:
        with pytest.raises(ValueError):
            model.rate_curve(n_points=1)
