"""Shared user-facing failure messages for the ranking triggers.

Messages are deliberately generic; diagnostic detail stays in server logs.
"""

FORBIDDEN_MESSAGE = "Forbidden."
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed."
NOT_FOUND_MESSAGE = "Document not found."
INTERNAL_ERROR_MESSAGE = "An error occurred."

CALLABLE_INTERNAL_STATUS = "INTERNAL"
