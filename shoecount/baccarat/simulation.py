"""
Shoe simulation.

Deals randomly shuffled shoes through a `CountingSession` exactly as a
user would key them in, and measures how the count-based recommendation
fares against the outcomes that follow it.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import scipy.stats as stats

from shoecount.baccarat.recommendation import Recommendation
from shoecount.baccarat.rules import BaccaratRules, Winner
from shoecount.common.shoe import RankShoe
from shoecount.engine.session import CountingSession

logger = logging.getLogger(__name__)

# Most cards a single round can take
MAX_ROUND_CARDS = 6


@dataclass
class ConfidenceInterval:
    """
    Represents a confidence interval with lower and upper bounds.

    Attributes:
        lower: The lower bound of the confidence interval
        upper: The upper bound of the confidence interval
        confidence: The confidence level (e.g., 0.95 for 95% confidence)
    """

    lower: float
    upper: float
    confidence: float

    def contains(self, value: float) -> bool:
        """Check if the interval contains a value."""
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        """Convert to a dictionary."""
        return {"lower": self.lower, "upper": self.upper, "confidence": self.confidence}


@dataclass
class RecommendationStats:
    """
    How one recommended side performed.

    Attributes:
        recommendation: The side that was recommended
        rounds: Rounds played while it was recommended
        decisive_rounds: Those rounds that did not end in a tie
        hits: Decisive rounds the recommended side won
        hit_rate: hits / decisive_rounds
        confidence_interval: Interval around hit_rate
    """

    recommendation: Recommendation
    rounds: int = 0
    decisive_rounds: int = 0
    hits: int = 0
    hit_rate: float = 0.0
    confidence_interval: ConfidenceInterval = field(
        default_factory=lambda: ConfidenceInterval(0.0, 0.0, 0.95)
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendation": self.recommendation.value,
            "rounds": self.rounds,
            "decisive_rounds": self.decisive_rounds,
            "hits": self.hits,
            "hit_rate": self.hit_rate,
            "confidence_interval": self.confidence_interval.to_dict(),
        }


@dataclass
class SimulationReport:
    """Aggregated result of a simulation run."""

    num_shoes: int
    rounds: int
    player_wins: int
    banker_wins: int
    ties: int
    naturals: int
    true_count_mean: float
    true_count_std: float
    by_recommendation: Dict[Recommendation, RecommendationStats]
    duration: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_shoes": self.num_shoes,
            "rounds": self.rounds,
            "player_wins": self.player_wins,
            "banker_wins": self.banker_wins,
            "ties": self.ties,
            "naturals": self.naturals,
            "true_count_mean": self.true_count_mean,
            "true_count_std": self.true_count_std,
            "by_recommendation": {
                rec.value: rec_stats.to_dict()
                for rec, rec_stats in self.by_recommendation.items()
            },
            "duration": self.duration,
        }


def calculate_confidence_interval(
    values: List[float], confidence: float = 0.95
) -> ConfidenceInterval:
    """
    Calculate a confidence interval for a set of values.

    Args:
        values: The values to calculate the confidence interval for
        confidence: The confidence level (e.g., 0.95 for 95% confidence)

    Returns:
        A ConfidenceInterval object
    """
    if len(values) < 2:
        mean = float(np.mean(values)) if values else 0.0
        return ConfidenceInterval(mean, mean, confidence)

    mean = np.mean(values)
    std_err = stats.sem(values)

    margin = std_err * stats.t.ppf((1 + confidence) / 2, len(values) - 1)
    lower = mean - margin
    upper = mean + margin

    return ConfidenceInterval(float(lower), float(upper), confidence)


def play_shoe(session: CountingSession, shoe: RankShoe) -> List[Dict[str, Any]]:
    """
    Key one shoe into the session, burn cards first.

    Args:
        session: A started session, positioned at the start of a burn phase
        shoe: Freshly shuffled shoe

    Returns:
        One record per finished round with the advice given before it
    """
    for rank in shoe.burn():
        session.submit_card(rank)
    session.finish_burn_phase()

    records = []
    while not shoe.is_cut_card_reached() and shoe.cards_remaining >= MAX_ROUND_CARDS:
        advice = session.recommendation
        count = session.true_count

        session.submit_card(shoe.deal())
        while not session.is_finished:
            session.submit_card(shoe.deal())

        records.append(
            {
                "recommendation": advice,
                "true_count": count,
                "winner": session.winner,
                "is_natural": session.is_natural,
            }
        )

    return records


def run_simulation(
    num_shoes: int = 100,
    rules: Optional[BaccaratRules] = None,
    penetration: float = 0.8,
    burn_cards: int = 1,
    seed: Optional[int] = None,
    confidence: float = 0.95,
) -> SimulationReport:
    """
    Run a shoe simulation.

    Args:
        num_shoes: Number of shoes to deal
        rules: Shoe and recommendation configuration
        penetration: Fraction of each shoe dealt before the cut card
        burn_cards: Cards burned at the start of each shoe
        seed: Seed for reproducible shoes
        confidence: Confidence level for the hit-rate intervals

    Returns:
        SimulationReport with the aggregated results
    """
    if num_shoes < 1:
        raise ValueError("Number of shoes must be at least 1")

    rules = rules if rules else BaccaratRules()
    session = CountingSession(rules)
    session.start()
    shoe = RankShoe(
        num_decks=rules.num_decks,
        penetration=penetration,
        burn_cards=burn_cards,
        seed=seed,
    )

    start_time = time.time()
    records: List[Dict[str, Any]] = []

    for shoe_index in range(num_shoes):
        if shoe_index > 0:
            shoe.shuffle()
            session.reset_shoe()
        records.extend(play_shoe(session, shoe))
        logger.debug("Shoe %d done, %d rounds so far", shoe_index + 1, len(records))

    duration = time.time() - start_time

    winners = [record["winner"] for record in records]
    counts = np.array([record["true_count"] for record in records], dtype=float)

    by_recommendation = {}
    for rec in (Recommendation.PLAYER, Recommendation.BANKER):
        rec_winners = [w for r, w in zip(records, winners) if r["recommendation"] is rec]
        decisive = [w for w in rec_winners if w is not Winner.TIE]
        hits = [1.0 if w.value == rec.value else 0.0 for w in decisive]
        by_recommendation[rec] = RecommendationStats(
            recommendation=rec,
            rounds=len(rec_winners),
            decisive_rounds=len(decisive),
            hits=int(sum(hits)),
            hit_rate=float(np.mean(hits)) if hits else 0.0,
            confidence_interval=calculate_confidence_interval(hits, confidence),
        )
    by_recommendation[Recommendation.NEUTRAL] = RecommendationStats(
        recommendation=Recommendation.NEUTRAL,
        rounds=sum(1 for r in records if r["recommendation"] is Recommendation.NEUTRAL),
    )

    report = SimulationReport(
        num_shoes=num_shoes,
        rounds=len(records),
        player_wins=sum(1 for w in winners if w is Winner.PLAYER),
        banker_wins=sum(1 for w in winners if w is Winner.BANKER),
        ties=sum(1 for w in winners if w is Winner.TIE),
        naturals=sum(1 for r in records if r["is_natural"]),
        true_count_mean=float(np.mean(counts)) if len(counts) else 0.0,
        true_count_std=float(np.std(counts)) if len(counts) else 0.0,
        by_recommendation=by_recommendation,
        duration=duration,
    )
    logger.info(
        "Simulated %d shoes, %d rounds in %.2fs", num_shoes, report.rounds, duration
    )
    return report
