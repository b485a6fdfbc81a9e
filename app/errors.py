# app/errors.py
from fastapi import HTTPException

# Request-level failures are HTTPExceptions so FastAPI renders them directly.

class Conflict(HTTPException):
    def __init__(self, detail: str = "name is already exist"):
        super().__init__(status_code=405, detail=detail)

class InvalidInput(HTTPException):
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=400, detail=detail)

class NotFound(HTTPException):
    def __init__(self, detail: str = "Product not found"):
        super().__init__(status_code=404, detail=detail)


class StorageError(Exception):
    """The product document or a photo file could not be read or written."""
