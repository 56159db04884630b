import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List

import aiohttp
import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from . import aggregates, crud, database, models, schemas, seed
from .config import get_settings
from .months import InvalidMonthError, resolve_month
from .preprocessing import SeedPayloadError

logger = logging.getLogger(__name__)

# keeps (page - 1) * perPage inside a signed 64 bit OFFSET
MAX_PAGE_VALUE = 2**31


@asynccontextmanager
async def lifespan(app: FastAPI):
    models.Base.metadata.create_all(bind=database.engine)
    yield


app = FastAPI(title="Sales Dashboard API", lifespan=lifespan)

# Every failure goes back to the dashboard as a short plain text message
@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

@app.exception_handler(RequestValidationError)
async def plain_text_validation_error(request: Request, exc: RequestValidationError):
    return PlainTextResponse("Invalid request parameters.", status_code=400)

# Dependency - Database session
def get_session_factory():
    return database.SessionLocal

def get_db(session_factory=Depends(get_session_factory)):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()

def month_index(month: str = Query(...)):
    try:
        return resolve_month(month)
    except InvalidMonthError:
        raise HTTPException(status_code=400, detail="Invalid month.")

def run_with_session(session_factory, func, *args, **kwargs):
    db = session_factory()
    try:
        return func(db, *args, **kwargs)
    finally:
        db.close()


@app.get("/api/init", response_class=PlainTextResponse) #fetch seed data and load it into the store
async def init_database(session_factory=Depends(get_session_factory)):
    try:
        rows = await seed.load_seed_rows()
        await run_in_threadpool(run_with_session, session_factory, crud.seed_transactions, rows)
    except (aiohttp.ClientError, asyncio.TimeoutError, SeedPayloadError, ValueError, SQLAlchemyError):
        logger.exception("Seeding the database failed")
        raise HTTPException(status_code=500, detail="Error initializing database.")
    return "Database initialized with seed data."

@app.get("/api/transactions", response_model=List[schemas.TransactionOut]) #month transactions with search and pages
def read_transactions(
    response: Response,
    month: int = Depends(month_index),
    search: str = "",
    page: int = Query(1, ge=1, le=MAX_PAGE_VALUE),
    per_page: int = Query(10, ge=1, le=MAX_PAGE_VALUE, alias="perPage"),
    db: Session = Depends(get_db),
):
    try:
        transactions = crud.get_transactions(db, month, search=search, page=page, per_page=per_page)
        response.headers["X-Total-Count"] = str(crud.count_transactions(db, month, search=search))
    except (SQLAlchemyError, OverflowError):
        logger.exception("Fetching transactions failed")
        raise HTTPException(status_code=500, detail="Error fetching transactions.")
    return transactions

@app.get("/api/statistics", response_model=schemas.Statistics)
def read_statistics(month: int = Depends(month_index), db: Session = Depends(get_db)):
    try:
        return aggregates.get_statistics(db, month)
    except SQLAlchemyError:
        logger.exception("Fetching statistics failed")
        raise HTTPException(status_code=500, detail="Error fetching statistics.")

@app.get("/api/bar-chart", response_model=List[schemas.PriceRangeCount])
def read_bar_chart(month: int = Depends(month_index), db: Session = Depends(get_db)):
    try:
        return aggregates.get_bar_chart(db, month)
    except SQLAlchemyError:
        logger.exception("Fetching bar chart data failed")
        raise HTTPException(status_code=500, detail="Error fetching bar chart data.")

@app.get("/api/pie-chart", response_model=List[schemas.CategoryCount])
def read_pie_chart(month: int = Depends(month_index), db: Session = Depends(get_db)):
    try:
        return aggregates.get_pie_chart(db, month)
    except SQLAlchemyError:
        logger.exception("Fetching pie chart data failed")
        raise HTTPException(status_code=500, detail="Error fetching pie chart data.")

@app.get("/api/combined", response_model=schemas.CombinedData) #all four dashboard payloads in one call
async def read_combined(month: int = Depends(month_index), session_factory=Depends(get_session_factory)):
    try:
        transactions, statistics, bar_chart, pie_chart = await asyncio.gather(
            run_in_threadpool(run_with_session, session_factory, crud.get_transactions, month),
            run_in_threadpool(run_with_session, session_factory, aggregates.get_statistics, month),
            run_in_threadpool(run_with_session, session_factory, aggregates.get_bar_chart, month),
            run_in_threadpool(run_with_session, session_factory, aggregates.get_pie_chart, month),
        )
    except SQLAlchemyError:
        logger.exception("Fetching combined data failed")
        raise HTTPException(status_code=500, detail="Error fetching combined data.")
    return {
        "transactions": transactions,
        "statistics": statistics,
        "barChartData": bar_chart,
        "pieChartData": pie_chart,
    }


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
