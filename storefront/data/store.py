# storefront/data/store.py
import threading
from contextlib import contextmanager, nullcontext
from decimal import Decimal
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.data.database import Base, build_engine
from storefront.data import models  # noqa: F401  rejestracja tabel w Base.metadata
from storefront.data.seed import seed
from storefront.services.lock_service import build_lock_service
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Store:
    """
    Jawnie tworzony magazyn danych: engine, fabryka sesji, locki koszykow
    i stawka podatku. Tworzony raz przy starcie aplikacji (albo per test)
    i wstrzykiwany do routerow przez app.state.
    """

    def __init__(
        self,
        database_url: str = settings.DATABASE_URL,
        tax_rate: Decimal = settings.TAX_RATE,
        lock_service=None,
        seed_catalog: bool = settings.SEED_CATALOG,
    ):
        self.engine = build_engine(database_url)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.tax_rate = Decimal(str(tax_rate))
        self.lock_service = lock_service or build_lock_service()

        # baza w pamieci = jedno wspolne polaczenie, sesje z roznych watkow
        # puli FastAPI nie moga przeplatac na nim transakcji
        self._connection_lock = threading.Lock() if isinstance(self.engine.pool, StaticPool) else None

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")

        if seed_catalog:
            with self.session() as db:
                seed(db)

    def session(self) -> Session:
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Sesja na czas jednego requestu."""
        with self._connection_lock or nullcontext():
            db = self.session()
            try:
                yield db
            finally:
                db.close()

    def dispose(self) -> None:
        self.engine.dispose()
