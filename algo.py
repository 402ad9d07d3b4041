"""Script entry point: ``python algo.py [options] [session|solve|sweep|price]``.

With no command, starts the interactive session: enter a board size to see
its solutions (or their count for boards larger than the print threshold);
enter 0 or a negative number to quit.
"""

from nqueens.analysis.cli import main


if __name__ == "__main__":
    main()
