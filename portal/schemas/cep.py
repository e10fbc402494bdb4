"""Schema for the postal-code (CEP) address lookup."""

from pydantic import BaseModel, Field


class AddressLookup(BaseModel):
    """Address fields returned by the CEP lookup service, renamed to the form's field names."""

    cep: str = Field(..., description="CEP formatted as NNNNN-NNN")
    address: str = Field(default="", description="Street (logradouro)")
    neighborhood: str = Field(default="", description="Neighborhood (bairro)")
    city: str = Field(default="", description="City (localidade)")
    state: str = Field(default="", description="State abbreviation (uf)")
