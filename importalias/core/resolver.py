"""
Consensus Resolver Module

This module decides, for every import path that is imported under more than
one alias, which alias the project should converge on, and produces the
recommendation shown for every alias that deviates from it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from .registry import AliasRegistry
from .scanner import ImportOccurrence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AliasStatus:
    """Whether an alias is acceptable for an import path."""
    ok: bool
    recommendation: str = ""


OK_STATUS = AliasStatus(ok=True)


@dataclass(frozen=True)
class PathVote:
    """Outcome of counting the aliases used for one import path."""
    import_path: str
    counts: Dict[str, int]
    winner: Optional[str]

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    @property
    def leaders(self) -> List[str]:
        return leading_aliases(self.counts)


def leading_aliases(counts: Dict[str, int]) -> List[str]:
    """Aliases sharing the highest count, sorted."""
    top = max(counts.values())
    return sorted(alias for alias, count in counts.items() if count == top)


def count_phrase(count: int) -> str:
    return "once" if count == 1 else f"{count} times"


def join_english(items: List[str]) -> str:
    """Join items as an English list: "a", "a and b", "a, b and c"."""
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"


def usage_phrase(aliases: List[str], count: int) -> str:
    """Describe a group of aliases that are all used the same number of times."""
    quoted = join_english([f'"{alias}"' for alias in aliases])
    if len(aliases) == 1:
        return f"{quoted} is used {count_phrase(count)}"
    determiner = "both" if len(aliases) == 2 else "all"
    return f"{quoted} are {determiner} used {count_phrase(count)} each"


def no_consensus_message(counts: Dict[str, int]) -> str:
    """
    Build the recommendation for an import path without a consensus alias.

    Every alias is listed. Aliases are grouped by usage count, highest
    count first, and sorted alphabetically within a group.

    Args:
        counts: Mapping of alias to number of occurrences

    Returns:
        Recommendation text without a terminal period
    """
    groups: Dict[int, List[str]] = {}
    for alias in sorted(counts):
        groups.setdefault(counts[alias], []).append(alias)

    phrases = [usage_phrase(groups[count], count) for count in sorted(groups, reverse=True)]
    return f"No consensus alias exists for this import in the project ({'; '.join(phrases)})"


def use_alias_message(consensus: str) -> str:
    return f'Use alias "{consensus}" instead'


class ConsensusResolver:
    """
    Resolver computing the consensus alias of every conflicted import path.

    The registry must be fully populated before the resolver is created;
    votes are computed once at construction.
    """

    def __init__(self, registry: AliasRegistry):
        self.registry = registry
        self._votes: Dict[str, PathVote] = {}

        for import_path, aliases in registry.imports_to_aliases().items():
            if len(aliases) > 1:
                self._votes[import_path] = self._vote(import_path, aliases)

    def _vote(self, import_path: str, aliases: Dict[str, List[ImportOccurrence]]) -> PathVote:
        counts = {alias: len(occurrences) for alias, occurrences in aliases.items()}
        leaders = leading_aliases(counts)
        winner = leaders[0] if len(leaders) == 1 else None

        if winner is None:
            logger.debug(f"No consensus alias for {import_path}: {counts}")
        else:
            logger.debug(f"Consensus alias for {import_path} is {winner!r}: {counts}")

        return PathVote(import_path=import_path, counts=counts, winner=winner)

    def votes(self) -> List[PathVote]:
        """Votes of all conflicted import paths, sorted by import path."""
        return [self._votes[path] for path in sorted(self._votes)]

    def vote_for(self, import_path: str) -> Optional[PathVote]:
        return self._votes.get(import_path)

    def get_alias_status(self, alias: Optional[str], import_path: str) -> AliasStatus:
        """
        Get the status of an alias used for an import path.

        Args:
            alias: Explicit alias name, or None for default, blank and
                dot imports
            import_path: The imported module path

        Returns:
            AliasStatus; not OK only for an explicit alias on a conflicted
            path that is not the consensus alias
        """
        vote = self._votes.get(import_path)
        if alias is None or vote is None or alias == vote.winner:
            return OK_STATUS

        if vote.is_tie:
            return AliasStatus(ok=False, recommendation=no_consensus_message(vote.counts))
        return AliasStatus(ok=False, recommendation=use_alias_message(vote.winner))
