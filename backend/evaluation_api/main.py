from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from . import config
from .router import Router
from .sheets import provision_tables
from .store import Base, RowStore

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

engine = create_engine(config.DATABASE_URL, future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
store = RowStore(SessionLocal, name=config.STORE_NAME)
app = FastAPI(title="Teaching Evaluation Backend", version=config.APP_VERSION)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=True, allow_methods=["*"], allow_headers=["*"])


def get_router() -> Router:
    return Router(store)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(engine)
    provision_tables(store)
    logger.info("Teaching evaluation backend %s ready (%s)", config.APP_VERSION, config.STORE_NAME)


@app.get("/")
def handle_get(request: Request, router: Router = Depends(get_router)):
    return JSONResponse(router.handle_get(dict(request.query_params)))


@app.post("/")
async def handle_post(request: Request, router: Router = Depends(get_router)):
    body = await request.body()
    return JSONResponse(await run_in_threadpool(router.handle_post, body))
