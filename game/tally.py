"""Vote tally for day lynch votes and night kill votes."""

from collections import Counter
from collections.abc import Iterable
from typing import Optional

from game.rules import DAY_VOTE_MIN_COUNT


def count_ballots(
    votes: dict[int, int],
    eligible_voters: Iterable[int],
    valid_targets: Optional[Iterable[int]] = None,
) -> Counter:
    """Votes received per target, counting only eligible voters and (if given) valid targets."""
    eligible = set(eligible_voters)
    targets = set(valid_targets) if valid_targets is not None else None
    counts: Counter = Counter()
    for voter_id, target_id in votes.items():
        if voter_id not in eligible:
            continue
        if targets is not None and target_id not in targets:
            continue
        counts[target_id] += 1
    return counts


def tally_day_votes(
    votes: dict[int, int],
    eligible_voters: Iterable[int],
    valid_targets: Optional[Iterable[int]] = None,
) -> Optional[int]:
    """
    Day rule: the leader must be unique and hold at least two votes.
    A shared top count or a lone vote eliminates no one.
    """
    counts = count_ballots(votes, eligible_voters, valid_targets)
    if not counts:
        return None
    top = max(counts.values())
    leaders = [tid for tid, c in counts.items() if c == top]
    if len(leaders) != 1 or top < DAY_VOTE_MIN_COUNT:
        return None
    return leaders[0]


def tally_night_votes(
    votes: dict[int, int],
    eligible_voters: Iterable[int],
    valid_targets: Optional[Iterable[int]] = None,
) -> Optional[int]:
    """
    Night rule: first maximum wins, scanning targets in ascending seat id.
    One vote is enough and a tie goes to the lowest seat id.
    """
    counts = count_ballots(votes, eligible_voters, valid_targets)
    best_id: Optional[int] = None
    best_count = 0
    for target_id in sorted(counts):
        if counts[target_id] > best_count:
            best_count = counts[target_id]
            best_id = target_id
    return best_id
