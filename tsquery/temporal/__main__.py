"""Allow ``python -m tsquery.temporal`` to evaluate a series from the shell."""

import sys


def _run() -> None:
    from tsquery.temporal.cli import main
    sys.exit(main())


if __name__ == "__main__":
    _run()
