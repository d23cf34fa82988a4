# storefront/client/cart_id_store.py
import uuid
from pathlib import Path

from storefront.utils.settings import CART_ID_PATH
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartIdStore:
    """
    Trzyma cart_id w lokalnym pliku miedzy uruchomieniami klienta.
    Brak pliku = nowy, pusty koszyk (serwer nie odzyskuje koszyka po innym kluczu).
    """

    def __init__(self, path: Path | str = CART_ID_PATH):
        self.path = Path(path)

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        cart_id = self.path.read_text(encoding="utf-8").strip()
        return cart_id or None

    def save(self, cart_id: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(cart_id, encoding="utf-8")

    def get_or_create(self) -> str:
        cart_id = self.load()
        if cart_id:
            return cart_id
        return self.reset()

    def reset(self) -> str:
        cart_id = str(uuid.uuid4())
        self.save(cart_id)
        logger.info(f"Generated new cart id {cart_id}")
        return cart_id
