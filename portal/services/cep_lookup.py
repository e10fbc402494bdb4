"""Address auto-fill: look up a CEP on ViaCEP and map the answer onto the registration form fields."""

import logging
from typing import TYPE_CHECKING

import httpx

from portal.schemas.cep import AddressLookup
from portal.services.validation import format_cep, only_digits, validate_cep

if TYPE_CHECKING:
    from portal.core.config import Settings

logger = logging.getLogger(__name__)


class CepLookupError(Exception):
    """Raised when a CEP cannot be looked up (bad input, unknown CEP, upstream failure)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidCepError(CepLookupError):
    """The CEP does not have 8 digits; the service is not called."""


class CepNotFoundError(CepLookupError):
    """The service answered but knows no address for this CEP."""


class CepServiceUnavailableError(CepLookupError):
    """The service could not be reached or timed out."""


async def lookup_cep(
    cep: str,
    settings: "Settings",
    transport: httpx.AsyncBaseTransport | None = None,
) -> AddressLookup:
    """
    Query ``{CEP_LOOKUP_BASE_URL}/{digits}/json/`` and return the address.

    The result is only a convenience for the client; nothing here is trusted
    or validated server-side.
    """
    if not validate_cep(cep):
        raise InvalidCepError("CEP must have 8 digits.")
    digits = only_digits(cep)
    url = f"{settings.CEP_LOOKUP_BASE_URL.rstrip('/')}/{digits}/json/"
    timeout = settings.CEP_LOOKUP_TIMEOUT_SEC

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            resp = await client.get(url, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.warning("CEP lookup timed out after %ss for %s", timeout, digits)
        raise CepServiceUnavailableError("CEP lookup timed out.") from e
    except httpx.RequestError as e:
        logger.warning("CEP lookup unreachable: %s", e)
        raise CepServiceUnavailableError("CEP lookup service unreachable.") from e

    if resp.status_code == 400:
        raise InvalidCepError("CEP rejected by lookup service.", 400)
    if resp.status_code >= 400:
        raise CepLookupError(f"CEP lookup returned {resp.status_code}.", resp.status_code)

    try:
        data = resp.json()
    except ValueError as e:
        raise CepLookupError("CEP lookup returned invalid JSON.") from e
    if not isinstance(data, dict):
        raise CepLookupError("CEP lookup returned an unexpected payload.")
    # ViaCEP reports unknown CEPs with 200 and {"erro": true} (sometimes the string "true").
    if data.get("erro") in (True, "true"):
        raise CepNotFoundError(f"CEP {format_cep(digits)} not found.", 404)

    return AddressLookup(
        cep=format_cep(digits),
        address=data.get("logradouro") or "",
        neighborhood=data.get("bairro") or "",
        city=data.get("localidade") or "",
        state=data.get("uf") or "",
    )
