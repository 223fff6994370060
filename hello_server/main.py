from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

app = FastAPI(title="Hello Server", version="1.0.0", redirect_slashes=False)

HELLO_BODY = "Hello world"
NOT_FOUND_BODY = "404 Not Found"


@app.get("/hello", response_class=PlainTextResponse)
def hello() -> str:
    return HELLO_BODY


# Unknown paths raise 404 and known paths with another method raise 405;
# both are answered as plain "not found".
@app.exception_handler(StarletteHTTPException)
async def not_found(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
