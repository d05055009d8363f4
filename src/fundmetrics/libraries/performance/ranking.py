"""Composite fund ranking.

Scores each fund on one period and orders the batch by score.

Score (defaults, maximum 100):

    cagr        min(cagr / 20 * 30, 30)
    sharpe      min(sharpe / 2 * 25, 25)
    volatility  max(20 - volatility / 30 * 20, 0)
    alpha       min((alpha + 5) / 10 * 15, 15)
    drawdown    max(10 - max_drawdown / 40 * 10, 0)

Every component is clamped on its own before summing. Ties are broken by
fund id (ascending) so the order is fully deterministic.
"""

from typing import Sequence

from fundmetrics.libraries.performance.config import MetricsConfig, ScoringConfig
from fundmetrics.libraries.performance.models import FundAnalysis, MetricsResult, RankedEntry, ScoreBreakdown
from fundmetrics.system.log_system import LoggerFactory

logger = LoggerFactory.get_logger()


def score_metrics(metrics: MetricsResult, scoring: ScoringConfig | None = None) -> ScoreBreakdown:
    """
    Compute the clamped score components for one MetricsResult.

    Only upper caps apply to the return, Sharpe and alpha terms (they can go
    negative); the volatility and drawdown terms only have a floor of 0.
    """
    s = scoring if scoring is not None else ScoringConfig()

    return ScoreBreakdown(
        cagr=min(metrics.cagr_pct / s.cagr_scale * s.cagr_weight, s.cagr_weight),
        sharpe=min(metrics.sharpe_ratio / s.sharpe_scale * s.sharpe_weight, s.sharpe_weight),
        volatility=max(s.volatility_weight - metrics.volatility_pct / s.volatility_scale * s.volatility_weight, 0.0),
        alpha=min((metrics.alpha_pct + s.alpha_shift) / s.alpha_scale * s.alpha_weight, s.alpha_weight),
        drawdown=max(s.drawdown_weight - metrics.max_drawdown_pct / s.drawdown_scale * s.drawdown_weight, 0.0),
    )


def select_primary_period(periods: Sequence[str], config: MetricsConfig | None = None) -> str:
    """
    Pick the ranking period: the preferred period ("1Y") when selected,
    otherwise the first selected period.

    Raises:
        ValueError: If no period is selected
    """
    if not periods:
        raise ValueError("At least one period must be selected")

    config = config if config is not None else MetricsConfig()
    if config.preferred_primary_period in periods:
        return config.preferred_primary_period

    return periods[0]


def rank_funds(
    analyses: Sequence[FundAnalysis],
    primary_period: str,
    scoring: ScoringConfig | None = None,
) -> list[RankedEntry]:
    """
    Rank funds by composite score on ``primary_period``.

    Funds without metrics for the primary period are left out.

    Args:
        analyses: Per-fund metrics keyed by period
        primary_period: Period whose metrics drive the score
        scoring: Score weights (defaults when None)

    Returns:
        Entries sorted by score descending, then fund id ascending, with
        rank = 1-based position
    """
    scored: list[tuple[FundAnalysis, ScoreBreakdown]] = []
    for analysis in analyses:
        metrics = analysis.metrics.get(primary_period)
        if metrics is None:
            logger.warning(
                "ranking.missing_period",
                fund_id=analysis.fund_id,
                period=primary_period,
                available=list(analysis.metrics),
            )
            continue
        scored.append((analysis, score_metrics(metrics, scoring)))

    scored.sort(key=lambda item: (-item[1].total, item[0].fund_id))

    ranked = [
        RankedEntry(
            fund_id=analysis.fund_id,
            fund_name=analysis.fund_name,
            metrics=analysis.metrics,
            primary_period=primary_period,
            overall_score=breakdown.total,
            score_breakdown=breakdown,
            rank=position,
        )
        for position, (analysis, breakdown) in enumerate(scored, start=1)
    ]

    logger.debug("ranking.completed", period=primary_period, ranked=len(ranked), skipped=len(analyses) - len(ranked))

    return ranked
