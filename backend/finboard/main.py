import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finboard.core.config import settings
from finboard.api.routes.auth import router as auth_router
from finboard.api.routes.incomes import router as incomes_router
from finboard.api.routes.expenses import router as expenses_router
from finboard.api.routes.debts import router as debts_router
from finboard.api.routes.assets import router as assets_router
from finboard.api.routes.dashboard import router as dashboard_router
from finboard.api.routes.rates import router as rates_router
from finboard.api.routes.audit import router as audit_router
from finboard.services.currency import FxUnavailableError
from finboard.services.monthly import DataFormatError, InvalidPeriodError

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="finboard")

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(InvalidPeriodError)
async def _invalid_period(request: Request, exc: InvalidPeriodError):
    return JSONResponse(status_code=400, content={"detail": "invalid_month", "value": str(exc.value)})

@app.exception_handler(DataFormatError)
async def _bad_record(request: Request, exc: DataFormatError):
    logger.error("unparseable %s in stored record: %r", exc.field_name, exc.value)
    return JSONResponse(status_code=422, content={"detail": f"invalid_record_{exc.field_name}", "value": str(exc.value)})

@app.exception_handler(FxUnavailableError)
async def _fx_down(request: Request, exc: FxUnavailableError):
    return JSONResponse(status_code=503, content={"detail": "fx_rate_unavailable"})

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(incomes_router)
app.include_router(expenses_router)
app.include_router(debts_router)
app.include_router(assets_router)
app.include_router(dashboard_router)
app.include_router(rates_router)
app.include_router(audit_router)
