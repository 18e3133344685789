"""Debug output for the exact solvers: per-column outcomes and node rates."""

from __future__ import annotations

import logging
import time
from typing import Dict

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 500_000


def describe_outcome(score: int, horizon: int) -> str:
    """
    Turn an exact solver score into "win in N" / "loss in N" / "draw".

    Solvers score a win found N plies below the root as `horizon - N`
    and the matching loss as `N - horizon`.
    """
    if score > 0:
        return f"win in {horizon - score} moves"
    if score < 0:
        return f"loss in {horizon + score} moves"
    return "draw"


def log_root_analysis(name: str, scores: Dict[int, int], horizon: int) -> None:
    logger.info("--- %s: position analysis ---", name)
    for col in sorted(scores):
        logger.info("column %d: %s", col, describe_outcome(scores[col], horizon))


class SearchStats:
    def __init__(self, label: str) -> None:
        self.label = label
        self.nodes = 0
        self.started = time.perf_counter()

    def reset(self) -> None:
        self.nodes = 0
        self.started = time.perf_counter()

    def tick(self) -> None:
        self.nodes += 1
        if self.nodes % PROGRESS_EVERY == 0 and logger.isEnabledFor(logging.DEBUG):
            logger.debug("thinking (%s)... nodes=%d rate=%.0f/s", self.label, self.nodes, self.rate())

    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def rate(self) -> float:
        elapsed = self.elapsed()
        return self.nodes / elapsed if elapsed > 0 else 0.0

    def log_summary(self) -> None:
        logger.info(
            "%s: nodes=%d elapsed=%.3fs rate=%.0f nodes/s",
            self.label,
            self.nodes,
            self.elapsed(),
            self.rate(),
        )
