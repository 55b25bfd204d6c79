from ._app import (
    ViewState,
    build_state,
    create_app,
    get_catalog,
    get_composer,
    get_dispatcher,
    get_view_state,
    wants_envelope,
)

__all__ = [
    "ViewState",
    "build_state",
    "create_app",
    "get_catalog",
    "get_composer",
    "get_dispatcher",
    "get_view_state",
    "wants_envelope",
]
