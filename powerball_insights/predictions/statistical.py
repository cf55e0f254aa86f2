"""Frequency-weighted Powerball number generation."""

import numpy as np
from typing import Dict, List, Optional, Sequence
import logging

from ..config.settings import settings as default_settings, PowerballSettings
from ..analysis.patterns import target_even_count
from ..models.analysis_models import AnalysisSnapshot, PARITY_LABELS
from ..models.drawing_models import PRIMARY_DOMAIN, BONUS_DOMAIN, NUMBERS_PER_DRAWING
from ..models.prediction_models import PredictionSet
from .sampling import make_rng, weighted_choice

logger = logging.getLogger(__name__)


class WeightedFrequencyModel:
    """Samples number sets biased toward the statistical signals of a snapshot.

    Every white ball starts from its historical frequency (numbers never drawn
    get ``floor_weight`` so they stay selectable). Hot, cold and overdue
    membership multiply that weight, and a number on several lists receives
    every matching multiplier. Selection then optionally pulls in a common
    pair partner and steers the remaining draws toward a parity pattern drawn
    from the observed pattern distribution.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 settings: Optional[PowerballSettings] = None):
        self.settings = settings or default_settings
        self.rng = rng if rng is not None else make_rng(self.settings.random_seed)

    def primary_weights(self, snapshot: AnalysisSnapshot) -> Dict[int, float]:
        """Boosted base weight of every white ball, in ascending number order."""
        s = self.settings
        weights = {n: float(snapshot.primary_frequency.get(n, 0) or s.floor_weight)
                   for n in PRIMARY_DOMAIN}

        for entry in snapshot.hot_primary:
            weights[entry.number] *= s.hot_boost
        for entry in snapshot.cold_primary:
            weights[entry.number] *= s.cold_boost
        for entry in snapshot.overdue_numbers:
            weights[entry.number] *= s.overdue_boost

        return weights

    def bonus_weights(self, snapshot: AnalysisSnapshot) -> Dict[int, float]:
        """Boosted weight of every Powerball number."""
        s = self.settings
        weights = {n: float(snapshot.bonus_frequency.get(n, 0) or s.floor_weight)
                   for n in BONUS_DOMAIN}

        for entry in snapshot.hot_bonus:
            weights[entry.number] *= s.hot_bonus_boost
        for entry in snapshot.cold_bonus:
            weights[entry.number] *= s.cold_bonus_boost

        return weights

    def _common_partner(self, snapshot: AnalysisSnapshot, number: int,
                        selected: Sequence[int]) -> Optional[int]:
        """First-ranked common pair partner of ``number`` not selected yet."""
        for entry in snapshot.common_pairs:
            first, second = entry.pair
            if first == number and second not in selected:
                return second
            if second == number and first not in selected:
                return first
        return None

    def _draw_target_even_count(self, snapshot: AnalysisSnapshot) -> int:
        labels = list(PARITY_LABELS)
        counts = [snapshot.parity_distribution.get(label, 0) for label in labels]
        return target_even_count(weighted_choice(labels, counts, self.rng))

    def _parity_adjusted(self, number: int, weight: float,
                         remaining_even: int, remaining_odd: int) -> float:
        s = self.settings
        is_even = number % 2 == 0
        if remaining_even <= 0:
            return weight * (s.parity_penalty if is_even else s.parity_boost)
        if remaining_odd <= 0:
            return weight * (s.parity_boost if is_even else s.parity_penalty)
        return weight

    def generate_primary_set(self, snapshot: AnalysisSnapshot) -> List[int]:
        """Pick five distinct white balls, returned ascending.

        The parity target is a soft bias: once one parity is exhausted the
        other is favoured, but the final set can still miss the target.
        """
        weights = self.primary_weights(snapshot)
        numbers = list(weights)

        first = weighted_choice(numbers, list(weights.values()), self.rng)
        selected = [first]

        if self.rng.random() < self.settings.pair_inclusion_probability:
            partner = self._common_partner(snapshot, first, selected)
            if partner is not None:
                selected.append(partner)

        target_even = self._draw_target_even_count(snapshot)

        while len(selected) < NUMBERS_PER_DRAWING:
            even_count = sum(1 for n in selected if n % 2 == 0)
            remaining_even = target_even - even_count
            remaining_odd = (NUMBERS_PER_DRAWING - target_even) - (len(selected) - even_count)

            candidates = [n for n in numbers if n not in selected]
            candidate_weights = [
                self._parity_adjusted(n, weights[n], remaining_even, remaining_odd)
                for n in candidates
            ]
            selected.append(weighted_choice(candidates, candidate_weights, self.rng))

        logger.debug(f"Generated white balls {sorted(selected)} (target even: {target_even})")
        return sorted(selected)

    def generate_bonus(self, snapshot: AnalysisSnapshot) -> int:
        """Pick one Powerball number."""
        weights = self.bonus_weights(snapshot)
        return weighted_choice(list(weights), list(weights.values()), self.rng)

    def generate_predictions(self, snapshot: AnalysisSnapshot, count: int) -> List[PredictionSet]:
        """Generate ``count`` independent prediction sets; duplicates are allowed."""
        if count < 0:
            raise ValueError(f"Prediction count must be non-negative, got {count}")

        predictions = []
        for _ in range(count):
            numbers = self.generate_primary_set(snapshot)
            bonus = self.generate_bonus(snapshot)
            predictions.append(PredictionSet(numbers=tuple(numbers), bonus_number=bonus))

        return predictions


def generate_primary_set(snapshot: AnalysisSnapshot,
                         rng: Optional[np.random.Generator] = None) -> List[int]:
    """Generate five white balls from a snapshot."""
    return WeightedFrequencyModel(rng).generate_primary_set(snapshot)


def generate_bonus(snapshot: AnalysisSnapshot,
                   rng: Optional[np.random.Generator] = None) -> int:
    """Generate a Powerball number from a snapshot."""
    return WeightedFrequencyModel(rng).generate_bonus(snapshot)


def generate_predictions(snapshot: AnalysisSnapshot, count: int = 10,
                         rng: Optional[np.random.Generator] = None) -> List[PredictionSet]:
    """Generate ``count`` prediction sets from a snapshot."""
    return WeightedFrequencyModel(rng).generate_predictions(snapshot, count)
