# storefront/domain/errors.py
"""
Wyjatki domenowe. Routery tlumacza je na odpowiedzi HTTP (status + code + message).
"""


class StorefrontError(Exception):
    code = "STOREFRONT_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(StorefrontError, ValueError):
    """Ilosc poza zakresem, niepoprawny payload. Nic nie zostaje zapisane."""

    code = "VALIDATION_ERROR"


class NotFoundError(StorefrontError, LookupError):
    code = "NOT_FOUND"


class IntegrityError(StorefrontError):
    """Pozycja koszyka/zamowienia wskazuje na produkt, ktorego nie ma w katalogu."""

    code = "INTEGRITY_ERROR"


class ConflictError(StorefrontError):
    """Nie udalo sie zalozyc locka na koszyk w zadanym czasie."""

    code = "CONFLICT"


class TransientError(StorefrontError):
    """Blad sieci / timeout po stronie klienta, mozna ponowic."""

    code = "TRANSIENT_ERROR"
