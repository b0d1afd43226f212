"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP and an offline
    in-memory double) plus the boundary adapter and repository that turn
    their outcomes into ``Result`` values.

Dependencies:
    ``http_client`` and ``notes_rest`` depend on ``requests``; the rest only
    on domain definitions.

Call context:
    Imported by ``quicknotes.app.main`` for runtime wiring and by tests.
"""
