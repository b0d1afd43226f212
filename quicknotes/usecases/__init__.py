"""Use-case layer between viewmodels and the notes repository.

Each module wraps exactly one repository call behind ``await use_case(params)``
and performs no transport I/O itself, preserving MVVM + Hexagonal boundaries.
"""

from .clear_notes import ClearNotes
from .delete_note import DeleteNote
from .get_notes import GetNotes
from .insert_note import InsertNote

__all__ = ["ClearNotes", "DeleteNote", "GetNotes", "InsertNote"]
