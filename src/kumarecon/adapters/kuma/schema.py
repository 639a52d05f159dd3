"""Pydantic models describing the Kuma control-plane API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class KumaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class IndexResponse(KumaBaseModel):
    """Body of ``GET /``; older control planes only send ``tagline``."""

    product: str | None = None
    tagline: str | None = None
    version: str = ""
    hostname: str | None = None
    instance_id: str | None = Field(default=None, alias="instanceId")

    @model_validator(mode="after")
    def _default_product(self) -> IndexResponse:
        if self.product is None:
            self.product = self.tagline or ""
        return self


class PolicyDescriptor(KumaBaseModel):
    name: str
    path: str
    read_only: bool = Field(default=False, alias="readOnly")


class PoliciesResponse(KumaBaseModel):
    policies: list[PolicyDescriptor]
