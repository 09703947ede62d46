"""API layer: the surface a presentation consumer calls.

1. Fetch + projection are composed here, never in the renderers
2. FetchError never escapes; it becomes a FAILURE outcome
3. Return Pydantic models or plain response dicts only
"""
