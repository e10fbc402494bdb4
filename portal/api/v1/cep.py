"""CEP lookup endpoint used by the registration form to pre-fill the address."""

from fastapi import APIRouter, HTTPException

from portal.core.config import get_settings
from portal.schemas.cep import AddressLookup
from portal.services.cep_lookup import (
    CepLookupError,
    CepNotFoundError,
    CepServiceUnavailableError,
    InvalidCepError,
    lookup_cep,
)

router = APIRouter()


@router.get("/{cep}", response_model=AddressLookup)
async def get_address(cep: str) -> AddressLookup:
    """Return street, neighborhood, city and state for a CEP (formatted or digits only)."""
    try:
        return await lookup_cep(cep, get_settings())
    except InvalidCepError as e:
        raise HTTPException(status_code=400, detail=e.message) from e
    except CepNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e
    except CepServiceUnavailableError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    except CepLookupError as e:
        raise HTTPException(status_code=502, detail=e.message) from e
