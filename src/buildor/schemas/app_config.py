"""Admin configuration schemas.

The transfer format uses camelCase keys so exported JSON can be pasted back
into the dashboard unchanged.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PayPalMode = Literal["sandbox", "live"]


class ConfigEntriesResponse(BaseModel):
    entries: dict[str, str]


class ConfigUpdateRequest(BaseModel):
    entries: dict[str, str | None]


class ConfigSaveResponse(BaseModel):
    saved_keys: list[str]


class ConfigImportRequest(BaseModel):
    raw: str = ""


class ConfigImportResponse(BaseModel):
    imported_groups: list[str]
    saved_keys: list[str]


class _TransferModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SupabaseTransfer(_TransferModel):
    url: str = ""
    anon_key: str = Field(default="", alias="anonKey")


class OAuthTransfer(_TransferModel):
    client_id: str = Field(default="", alias="clientId")
    client_secret: str = Field(default="", alias="clientSecret")


class PayPalTransfer(OAuthTransfer):
    mode: PayPalMode = "sandbox"


class ConfigTransfer(BaseModel):
    supabase: SupabaseTransfer
    google: OAuthTransfer
    github: OAuthTransfer
    paypal: PayPalTransfer
