"""
database.py — Store Access for Request Handlers

Purpose:
- Expose a FastAPI dependency `get_store()` that hands each request the
  EntityStore owned by the running application.

Key Characteristics:
- The store is created in `main.create_app()` and kept on `app.state.store`.
  Tests build an app around their own fresh store.
- Storage is in-memory; there is no engine, session or migration step.

This module does NOT:
- Create stores on its own (no module-level singleton).
- Perform any queries or business logic.
"""

from fastapi import Request

from lifeshare.services.store import EntityStore


def get_store(request: Request) -> EntityStore:
    """
    FastAPI dependency: the application's EntityStore.

    Usage in API endpoint:
        def endpoint(store: EntityStore = Depends(get_store)):
            store.get_user(...)

    Raises:
        RuntimeError: If the app was built without a store
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError(
            "No EntityStore attached to the application. Build the app with create_app()."
        )
    return store
