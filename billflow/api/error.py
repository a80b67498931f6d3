"""API error type

Routes raise ClientError with a use case Error; the handler registered in
create_app renders it as {"error": {"code", "message", "details"?}}.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    def to_content(self) -> dict:
        body = {"code": self.error.code, "message": self.error.message}
        if self.error.details:
            body["details"] = self.error.details
        return {"error": body}


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())
