"""Application composition layer.

Wires adapters, use cases and viewmodels into the ``quicknotes`` console
command without placing business logic in the renderer.
"""
