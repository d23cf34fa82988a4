# storefront/data/database.py
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def build_engine(url: str) -> Engine:
    if url in ("sqlite://", "sqlite+pysqlite://") or (url.startswith("sqlite") and ":memory:" in url):
        # jedno polaczenie na caly proces, inaczej kazda sesja widzi pusta baze
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


def get_db(request: Request) -> Iterator[Session]:
    with request.app.state.store.session_scope() as db:
        yield db


def get_store(request: Request):
    return request.app.state.store
