from __future__ import annotations

from typing import Any

from src.ui import components


def _upload_key(upload: Any) -> tuple[str, int] | None:
    """Identity of an uploaded file across Streamlit reruns."""
    if upload is None:
        return None
    return (str(upload.name), int(getattr(upload, "size", 0) or 0))


def _sync_upload(controller, upload: Any, ui_state: dict) -> bool:  # noqa: ANN001
    """Select ``upload`` on the controller when it is a new selection.

    The uploader keeps returning the same file on every rerun. Clearing it
    forgets the last key, so picking the same file again counts as a new
    selection.
    """
    key = _upload_key(upload)
    if key is None:
        ui_state["last_upload_key"] = None
        return False
    if key == ui_state.get("last_upload_key"):
        return False
    controller.select_dataset(upload)
    ui_state["last_upload_key"] = key
    return True


def _number_input_kwargs(spec, current: int | float) -> dict[str, Any]:  # noqa: ANN001
    """Keyword arguments for ``st.number_input`` for one parameter spec.

    Integer fields get integer bounds and step so Streamlit returns ints.
    """
    if spec.kind is int:
        kwargs: dict[str, Any] = {
            "min_value": int(spec.min_value) if spec.min_value is not None else None,
            "max_value": int(spec.max_value) if spec.max_value is not None else None,
            "value": int(current),
            "step": int(spec.step),
        }
    else:
        kwargs = {
            "min_value": float(spec.min_value) if spec.min_value is not None else None,
            "max_value": float(spec.max_value) if spec.max_value is not None else None,
            "value": float(current),
            "step": float(spec.step),
            "format": "%.4f",
        }
    kwargs["help"] = spec.help or None
    return kwargs


def render_upload_panel(
    *,
    st,
    controller,
    ui_state: dict,
    PARAMETER_SPECS: dict,
    ACCEPTED_UPLOAD_TYPES: list[str],
) -> None:
    st.subheader("1. Dataset")

    upload = st.file_uploader(
        "Raman spectroscopy dataset",
        type=ACCEPTED_UPLOAD_TYPES,
        key="dataset_upload",
    )
    _sync_upload(controller, upload, ui_state)

    components.render_dataset_summary(st, controller.dataset)

    st.subheader("2. Parameters")
    running = controller.status.is_running
    if running:
        st.caption("Parameters are locked while an analysis is running.")

    for name, spec in PARAMETER_SPECS.items():
        current = getattr(controller.parameters, name)
        raw = st.number_input(
            spec.label,
            key=f"param_{name}",
            disabled=running,
            **_number_input_kwargs(spec, current),
        )
        if not running:
            controller.update_parameter(name, raw)
