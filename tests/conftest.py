"""Pytest configuration to make the project root importable.

``src`` is a namespace package at the repository root, so tests need the root
on ``sys.path`` for ``import src...`` to work from any working directory.
"""

import os
import sys

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Keep the notification event log out of the repository during tests.
os.environ.setdefault("RAMAN_EVENT_LOG", "0")
