"""Render context construction."""

from collections.abc import Mapping


def model_context(model: object) -> dict[str, object]:
    """Expose a caller-supplied model to template markup.

    The model is always reachable as ``model``. When it is a mapping its keys
    are also exposed as top-level variables, and a key named ``model`` wins
    over the model itself. Nothing else about the model is inspected, and it
    is never modified.

    Args:
        model: Opaque render model.

    Returns:
        A fresh context dictionary.
    """
    context: dict[str, object] = {"model": model}
    if isinstance(model, Mapping):
        context.update(model)
    return context
