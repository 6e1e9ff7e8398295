#!/usr/bin/env python3
"""timemanagement demo entry point.

Run with:
    python main.py [seconds]
    python -m timemanagement [seconds]
"""

from timemanagement.__main__ import main


if __name__ == "__main__":
    main()
