"""Tests for performance metrics calculations."""

import math

import pytest

from fundmetrics.libraries.performance.config import MetricsConfig
from fundmetrics.libraries.performance.errors import InsufficientDataError
from fundmetrics.libraries.performance.metrics import (
    annualize_return,
    calculate_absolute_return,
    calculate_cagr,
    calculate_daily_returns,
    calculate_drawdown_series,
    calculate_max_drawdown,
    calculate_rolling_returns,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    calculate_standard_deviation,
    calculate_treynor_ratio,
    calculate_volatility,
)

SQRT_252 = math.sqrt(252)


class TestSeriesUtilities:
    """Test daily returns and standard deviation."""

    def test_daily_returns_are_simple_returns(self, make_series):
        """Test each return is (nav[i] - nav[i-1]) / nav[i-1]."""
        series = make_series([100.0, 110.0, 99.0])

        result = calculate_daily_returns(series)

        assert result == pytest.approx([0.1, -0.1])

    def test_daily_returns_one_shorter_than_series(self, wavy_series):
        """Test return series length is len(series) - 1."""
        series = wavy_series(30)

        assert len(calculate_daily_returns(series)) == 29

    def test_daily_returns_single_observation_raises(self, make_series):
        """Test that fewer than 2 observations is a structural error."""
        with pytest.raises(InsufficientDataError) as exc_info:
            calculate_daily_returns(make_series([100.0]))

        assert exc_info.value.required == 2
        assert exc_info.value.actual == 1

    def test_insufficient_data_is_value_error(self):
        """Test InsufficientDataError can be caught as ValueError."""
        with pytest.raises(ValueError):
            calculate_daily_returns([])

    def test_standard_deviation_empty_is_zero(self):
        """Test empty input resolves to 0 instead of raising."""
        assert calculate_standard_deviation([]) == 0.0

    @pytest.mark.parametrize("value", [0.0, -3.5, 0.01, 1e6])
    def test_standard_deviation_single_value_is_zero(self, value):
        """Test a single value has zero deviation."""
        assert calculate_standard_deviation([value]) == 0.0

    def test_standard_deviation_is_population(self):
        """Test divisor is N, not N-1."""
        # mean 2.5, squared diffs 2.25 + 0.25 + 0.25 + 2.25 = 5, / 4 = 1.25
        result = calculate_standard_deviation([1.0, 2.0, 3.0, 4.0])

        assert result == pytest.approx(math.sqrt(1.25))


class TestReturnMetrics:
    """Test return and growth calculations."""

    def test_absolute_return_positive(self):
        """Test positive return calculation."""
        assert calculate_absolute_return(100.0, 150.0) == pytest.approx(50.0)

    def test_absolute_return_negative(self):
        """Test negative return calculation."""
        assert calculate_absolute_return(100.0, 80.0) == pytest.approx(-20.0)

    @pytest.mark.parametrize(
        "start_nav,end_nav",
        [(100.0, 100.0), (100.0, 100.5), (100.0, 99.5), (12.34, 56.78), (56.78, 12.34)],
    )
    def test_cagr_and_absolute_return_agree_in_sign(self, start_nav, end_nav):
        """Test both return measures have the sign of end - start."""
        expected_sign = (end_nav > start_nav) - (end_nav < start_nav)

        absolute = calculate_absolute_return(start_nav, end_nav)
        cagr = calculate_cagr(start_nav, end_nav, 0.75)

        assert (absolute > 0) - (absolute < 0) == expected_sign
        assert (cagr > 0) - (cagr < 0) == expected_sign

    def test_cagr_two_years(self):
        """Test CAGR calculation for two years."""
        # (1.21)^0.5 - 1 = 10%
        assert calculate_cagr(100.0, 121.0, 2) == pytest.approx(10.0)

    def test_cagr_zero_years_returns_zero(self):
        """Test zero-length period resolves to 0 instead of dividing by zero."""
        assert calculate_cagr(100.0, 110.0, 0) == 0.0

    def test_cagr_monotonic_growth_over_two_trading_days(self):
        """Test CAGR with years = 2/252 reproduces the closed form."""
        years = 2 / 252

        result = calculate_cagr(100.0, 121.0, years)

        assert result == pytest.approx(((121 / 100) ** (1 / years) - 1) * 100)

    def test_cagr_overflow_is_infinite(self):
        """Test a large move over two trading days gives inf instead of OverflowError."""
        assert calculate_cagr(1.0, 1000.0, 2 / 252) == math.inf

    def test_cagr_deep_loss_over_short_period_is_minus_100(self):
        """Test the opposite extreme underflows towards a total loss."""
        assert calculate_cagr(1000.0, 1.0, 2 / 252) == pytest.approx(-100.0)

    def test_annualize_return_overflow_is_infinite(self):
        """Test a 900% return over one day annualizes to inf."""
        assert annualize_return(900.0, 1) == math.inf

    def test_annualize_return_below_total_loss_is_nan(self):
        """Test a growth factor below zero has no real annual rate."""
        assert math.isnan(annualize_return(-150.0, 730))

    def test_annualize_return_inverse_of_cagr(self):
        """Test annualizing the period return matches CAGR over the same years."""
        period_return = calculate_absolute_return(100.0, 121.0)

        result = annualize_return(period_return, 730)

        assert result == pytest.approx(calculate_cagr(100.0, 121.0, 730 / 365))

    def test_annualize_return_uses_calendar_days(self):
        """Test annualization uses calendar days from config."""
        config = MetricsConfig(calendar_days_per_year=360)

        result = annualize_return(10.0, 360, config)

        assert result == pytest.approx(10.0)

    def test_annualize_return_zero_days(self):
        """Test zero days resolves to 0."""
        assert annualize_return(5.0, 0) == 0.0


class TestVolatility:
    """Test annualized volatility."""

    def test_flat_series_has_zero_volatility(self, make_series):
        """Test constant NAV gives zero volatility."""
        assert calculate_volatility(make_series([100.0, 100.0, 100.0])) == 0.0

    def test_identical_returns_have_zero_volatility(self, make_series):
        """Test constant growth rate (identical daily returns) gives zero volatility."""
        assert calculate_volatility(make_series([100.0, 110.0, 121.0])) == pytest.approx(0.0, abs=1e-12)

    def test_volatility_annualized_with_trading_days(self, make_series):
        """Test stdev * sqrt(252) * 100."""
        # Returns [0.1, -0.1]: population stdev 0.1
        result = calculate_volatility(make_series([100.0, 110.0, 99.0]))

        assert result == pytest.approx(0.1 * SQRT_252 * 100)

    def test_volatility_respects_configured_trading_days(self, make_series):
        """Test annualization factor comes from config."""
        series = make_series([100.0, 110.0, 99.0])

        result = calculate_volatility(series, MetricsConfig(trading_days_per_year=52))

        assert result == pytest.approx(0.1 * math.sqrt(52) * 100)

    def test_volatility_non_negative(self, wavy_series):
        """Test volatility is positive when returns vary."""
        assert calculate_volatility(wavy_series(60)) > 0


class TestRiskAdjustedRatios:
    """Test Sharpe, Sortino and Treynor ratios."""

    def test_sharpe_ratio(self):
        """Test (return - risk free) / volatility."""
        assert calculate_sharpe_ratio(14.0, 10.0, risk_free_rate_pct=6.5) == pytest.approx(0.75)

    def test_sharpe_ratio_zero_volatility(self):
        """Test zero volatility resolves to 0."""
        assert calculate_sharpe_ratio(14.0, 0.0) == 0.0

    def test_sharpe_ratio_uses_config_risk_free_rate(self):
        """Test risk-free rate defaults to the config value."""
        config = MetricsConfig(risk_free_rate_pct=4.0)

        assert calculate_sharpe_ratio(14.0, 10.0, config=config) == pytest.approx(1.0)
        assert calculate_sharpe_ratio(14.0, 10.0) == pytest.approx(0.75)  # default 6.5

    def test_sortino_without_negative_returns_returns_annualized_return(self, make_series):
        """Test the no-downside case returns the raw annualized mean return."""
        series = make_series([100.0, 110.0, 121.0])

        result = calculate_sortino_ratio(series)

        assert result == pytest.approx(0.1 * 252 * 100)

    def test_sortino_single_negative_return_has_zero_downside(self, make_series):
        """Test a single negative return has zero deviation and resolves to 0."""
        series = make_series([100.0, 110.0, 99.0, 108.9])

        assert calculate_sortino_ratio(series) == 0.0

    def test_sortino_ratio(self, make_series):
        """Test Sortino against a hand-computed value."""
        # Returns -0.1, -0.2, +0.1
        series = make_series([100.0, 90.0, 72.0, 79.2])
        annualized_return = (-0.2 / 3) * 252 * 100
        downside = 0.05 * SQRT_252 * 100  # stdev of [-0.1, -0.2]

        result = calculate_sortino_ratio(series, risk_free_rate_pct=6.5)

        assert result == pytest.approx((annualized_return - 6.5) / downside)

    def test_treynor_ratio(self):
        """Test (return - risk free) / beta."""
        assert calculate_treynor_ratio(16.5, 2.0, risk_free_rate_pct=6.5) == pytest.approx(5.0)

    def test_treynor_ratio_zero_beta(self):
        """Test zero beta resolves to 0."""
        assert calculate_treynor_ratio(16.5, 0.0) == 0.0


class TestDrawdown:
    """Test maximum drawdown and drawdown series."""

    def test_decline_then_recovery(self, make_series):
        """Test peak 100 at d1, trough 90 at d2; the later 95 leaves the trough alone."""
        series = make_series([100.0, 90.0, 95.0])

        result = calculate_max_drawdown(series)

        assert result.max_drawdown_pct == pytest.approx(10.0)
        assert result.peak_nav == 100.0
        assert result.peak_date == series[0].date
        assert result.trough_nav == 90.0
        assert result.trough_date == series[1].date

    def test_non_decreasing_series_has_zero_drawdown(self, make_series):
        """Test monotonic growth has no drawdown."""
        series = make_series([100.0, 110.0, 121.0])

        result = calculate_max_drawdown(series)

        assert result.max_drawdown_pct == 0.0
        assert result.peak_date == result.trough_date == series[0].date

    def test_flat_series_has_zero_drawdown(self, make_series):
        """Test flat NAV has no drawdown."""
        assert calculate_max_drawdown(make_series([100.0, 100.0, 100.0])).max_drawdown_pct == 0.0

    def test_deeper_drawdown_after_new_peak(self, make_series):
        """Test peak reported is the one active at the deepest trough."""
        series = make_series([100.0, 90.0, 120.0, 84.0, 130.0])

        result = calculate_max_drawdown(series)

        assert result.max_drawdown_pct == pytest.approx(30.0)
        assert result.peak_nav == 120.0
        assert result.peak_date == series[2].date
        assert result.trough_nav == 84.0
        assert result.trough_date == series[3].date

    def test_later_shallower_drawdown_does_not_replace_max(self, make_series):
        """Test a later new high does not rewrite the earlier deeper trough."""
        series = make_series([100.0, 80.0, 120.0, 110.0])

        result = calculate_max_drawdown(series)

        assert result.max_drawdown_pct == pytest.approx(20.0)
        assert result.peak_date == series[0].date
        assert result.trough_date == series[1].date

    def test_any_decline_gives_positive_drawdown(self, wavy_series):
        """Test a series with a down day has a positive drawdown."""
        result = calculate_max_drawdown(wavy_series(40))

        assert result.max_drawdown_pct > 0
        assert result.peak_date <= result.trough_date

    def test_empty_series_raises(self):
        """Test drawdown needs at least one observation."""
        with pytest.raises(InsufficientDataError):
            calculate_max_drawdown([])

    def test_drawdown_series_per_point(self, make_series):
        """Test per-point drawdown against the running peak."""
        series = make_series([100.0, 90.0, 95.0, 105.0])

        points = calculate_drawdown_series(series)

        assert [p.drawdown_pct for p in points] == pytest.approx([0.0, 10.0, 5.0, 0.0])
        assert [p.peak_nav for p in points] == [100.0, 100.0, 100.0, 105.0]
        assert [p.date for p in points] == [obs.date for obs in series]


class TestRollingReturns:
    """Test rolling window returns."""

    def test_rolling_returns(self, make_series):
        """Test each window return is dated at its end."""
        series = make_series([100.0, 110.0, 121.0, 133.1])

        result = calculate_rolling_returns(series, 2)

        assert [r.date for r in result] == [series[2].date, series[3].date]
        assert [r.return_pct for r in result] == pytest.approx([21.0, 21.0])

    def test_rolling_returns_series_not_longer_than_window(self, make_series):
        """Test empty result when len(series) <= window."""
        series = make_series([100.0, 101.0, 102.0])

        assert calculate_rolling_returns(series, 3) == []
        assert calculate_rolling_returns(series, 5) == []

    def test_rolling_returns_count(self, wavy_series):
        """Test one entry per index >= window."""
        assert len(calculate_rolling_returns(wavy_series(300), 252)) == 48

    def test_rolling_returns_invalid_window(self, make_series):
        """Test window must be at least 1."""
        with pytest.raises(ValueError, match="window_days"):
            calculate_rolling_returns(make_series([100.0, 101.0]), 0)
