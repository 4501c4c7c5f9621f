"""Analysis run lifecycle.

Purpose:
- Own the run state machine (idle, running, complete) and its stage sequence.
- Produce the result bundle through a pluggable engine.

Nothing here imports Streamlit; the UI drives the controller and renders its state.
"""
