"""Terminal frontends."""
