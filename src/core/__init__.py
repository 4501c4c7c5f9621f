"""Core (pure) library layer.

This package is UI-agnostic and safe to import from:
- the run controller
- the Streamlit pages
- tests

It does not import Streamlit or trigger side effects at import time.
"""
