"""Move rules, path resolution, solver and game sessions."""
