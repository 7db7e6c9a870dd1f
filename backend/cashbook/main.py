from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cashbook.core.config import settings
from cashbook.core.logging_setup import configure_logging
from cashbook.api.routes.transactions import router as tx_router

app = FastAPI(title="cashbook")

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def _malformed_body(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(tx_router)
app.include_router(tx_router, prefix="/api")

@app.on_event("startup")
async def _configure_logging():
    configure_logging(settings.log_level)


def run():
    import uvicorn

    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
