# skintriage/utils/errors.py

from fastapi import HTTPException

class InvalidInputError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)

class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=401,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class QuotaExhaustedError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=402, detail=detail)

class RateLimitedError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=429, detail=detail)

class UpstreamError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)
