#!/usr/bin/env python3
"""TimeFlo — entry point.

Run with:
    python main.py
    python -m timeflo
"""

from timeflo.__main__ import main


if __name__ == "__main__":
    main()
