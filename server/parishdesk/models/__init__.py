from .document import StoredDocument  # noqa: F401
