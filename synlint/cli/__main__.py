#!/usr/bin/env python3
"""Entry point for synlint CLI when run as python -m synlint.cli."""

if __name__ == "__main__":
    from synlint.cli.main import main

    main()
