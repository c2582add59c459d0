# app/notes_core/errors.py
"""Errors raised by note operations and mapped to HTTP responses."""


class NotesError(Exception):
    """Base for every error that is safe to show to the caller."""

    def __init__(self, code, message, status_code=400):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(NotesError):
    def __init__(self, message="Invalid request"):
        super().__init__("validation_error", message, 400)


class UnauthorizedError(NotesError):
    def __init__(self, message="Missing caller identity"):
        super().__init__("unauthorized", message, 401)


class NoteNotFound(NotesError):
    def __init__(self, note_id):
        self.note_id = note_id
        super().__init__("not_found", f"Note {note_id} not found", 404)


class MethodNotAllowed(NotesError):
    def __init__(self, method):
        super().__init__("method_not_allowed", f"Method {method} not allowed", 405)


class RouteNotFound(NotesError):
    def __init__(self, path):
        super().__init__("not_found", f"No route for {path}", 404)
