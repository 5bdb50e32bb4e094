from klotski.frontend.cli.rich.app import render_board, run

__all__ = ["render_board", "run"]
