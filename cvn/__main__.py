"""Module entrypoint for ``python -m cvn``.

This keeps module-mode execution behavior identical to the CLI script.
All dispatching happens in ``cvn.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
