from klotski.engine.gamesolver.canonical import canonical_key
from klotski.engine.gamesolver.solver import (
    Metric,
    SearchResult,
    SolutionPath,
    SolveStatus,
    Solver,
    SolverConfig,
)

__all__ = [
    "Metric",
    "SearchResult",
    "SolutionPath",
    "SolveStatus",
    "Solver",
    "SolverConfig",
    "canonical_key",
]
