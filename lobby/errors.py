# lobby/errors.py
from fastapi import Request
from fastapi.responses import JSONResponse


class PageError(Exception):
    """A page load failure rendered as `{"message": ...}` with `status_code`"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def page_error_handler(request: Request, exc: PageError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
