"""ViewModel package for UI state and event handling.

Call context:
    ``quicknotes/app/main.py`` builds ``NotesVM`` and subscribes a renderer to
    its state stream; views only call ``dispatch``.

Dependencies:
    Modules in this package depend on domain types and use cases only. I/O
    adapters stay outside and reach viewmodels through the use cases.

Responsibilities:
    - Own one immutable UI state per viewmodel and update it atomically.
    - Model each async operation as a ``ViewState`` lifecycle.
    - Surface every failure through a single error observer.
"""
