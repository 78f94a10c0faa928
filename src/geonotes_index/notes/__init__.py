from geonotes_index.notes.note import Note, truncate_to_millis

__all__ = ["Note", "truncate_to_millis"]
