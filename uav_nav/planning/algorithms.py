"""
Algorithm Tags
==============

The closed set of routing strategy names a caller may select.

Tags are metadata: every tag is served by the same straight-line
synthesizer with local obstacle avoidance, so no tag implies an optimal
route. The selected tag is carried through to the result record.
"""

from enum import Enum


class Algorithm(str, Enum):
    """Routing strategy tag"""
    ASTAR = 'A*'
    DIJKSTRA = 'Dijkstra'
    GREEDY = 'Greedy'
    ENERGY_OPTIMAL = 'EnergyOptimal'

    @classmethod
    def from_label(cls, label: str) -> 'Algorithm':
        """
        Resolve a tag from its label or member name (case-insensitive).

        Raises:
            ValueError: label names no known strategy
        """
        if isinstance(label, cls):
            return label
        for algorithm in cls:
            if label == algorithm.value:
                return algorithm
        lowered = str(label).strip().lower()
        for algorithm in cls:
            if lowered in (algorithm.value.lower(), algorithm.name.lower()):
                return algorithm
        raise ValueError(
            f"Unknown algorithm: {label!r} (expected one of {cls.labels()})"
        )

    @classmethod
    def labels(cls) -> list:
        return [a.value for a in cls]

    @property
    def shares_fallback_heuristic(self) -> bool:
        """All tags currently run the same synthesizer"""
        return True

    def __str__(self) -> str:
        return self.value
