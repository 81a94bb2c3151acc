"""Best strike price selection."""

from esop.exceptions import NoCandidatesError
from esop.models.enums import RankingGoal
from esop.models.results import StrikeCandidate, StrikeComparisonRow


def select_best(
    candidates: list[StrikeCandidate], goal: RankingGoal, quantity: int = 0
) -> StrikeCandidate:
    """Pick the extremal candidate, scanning left to right.

    Only a strictly better value replaces the current pick, so on ties the
    candidate listed first wins.
    """
    if not candidates:
        raise NoCandidatesError(quantity)
    best = candidates[0]
    for candidate in candidates[1:]:
        if goal == RankingGoal.MINIMIZE:
            if candidate.value < best.value:
                best = candidate
        elif candidate.value > best.value:
            best = candidate
    return best


def compare_strikes(
    quantity: int, candidates: list[StrikeCandidate], goal: RankingGoal
) -> StrikeComparisonRow:
    best = select_best(candidates, goal, quantity)
    return StrikeComparisonRow(
        quantity=quantity,
        candidates=candidates,
        best_strike_price=best.strike_price,
    )
