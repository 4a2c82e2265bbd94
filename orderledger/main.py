from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from orderledger.core.config import settings
from orderledger.core.log_config import configure_logging
from orderledger.db.mongo import connect_to_mongo, close_mongo_connection
from orderledger.api.v1.api import api_router
from orderledger.utils.ledger_errors import LedgerError, OverpaymentError, ConcurrentPaymentError

configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """Ledger rule violations become 400s carrying the user-facing message"""
    content = {"detail": exc.message, "error": type(exc).__name__}
    if isinstance(exc, OverpaymentError):
        content["remaining"] = str(exc.remaining)
    status_code = 409 if isinstance(exc, ConcurrentPaymentError) else 400
    return JSONResponse(status_code=status_code, content=content)

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

app.include_router(api_router, prefix=settings.API_V1_STR)
