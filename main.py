#!/usr/bin/env python3
"""GridGoal — entry point.

Run with:
    python main.py
    python -m gridgoal
"""

from gridgoal.__main__ import main


if __name__ == "__main__":
    main()
