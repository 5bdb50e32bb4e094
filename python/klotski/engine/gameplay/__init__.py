from klotski.engine.gameplay.game import GamePlay, cells_from_pixels

__all__ = ["GamePlay", "cells_from_pixels"]
