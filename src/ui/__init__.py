"""Thin UI layer.

This package contains the Streamlit entrypoint and page modules that:
- collect the dataset and analysis parameters
- start and step the analysis run
- render results and the report download

Business logic lives in src/core and src/jobs.
"""
