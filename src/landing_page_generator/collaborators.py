from __future__ import annotations

import base64
import json
from typing import Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .models.form import FormAttributes
from .models.section import PageSection, ThemeConfig


class ShareRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sections: Sequence[PageSection] = Field(default_factory=list)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    form_data: FormAttributes = Field(default_factory=FormAttributes, alias="formData")


class ExportRequest(ShareRequest):
    include_styles: bool = Field(default=True, alias="includeStyles")
    include_scripts: bool = Field(default=True, alias="includeScripts")


class HtmlExporter(Protocol):
    """Renders the page sections to a standalone markup document."""

    def __call__(self, request: ExportRequest) -> str:
        ...


class ShareEncoder(Protocol):
    """Packs the page into an opaque payload suitable for a share link."""

    def __call__(self, request: ShareRequest) -> str:
        ...


def encode_share_payload(request: ShareRequest) -> str:
    data = json.dumps(
        request.model_dump(mode="json", by_alias=True),
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return base64.urlsafe_b64encode(data.encode("utf-8")).decode("ascii")


def decode_share_payload(token: str) -> ShareRequest:
    decoded = base64.urlsafe_b64decode(token.encode("ascii")).decode("utf-8")
    return ShareRequest.model_validate(json.loads(decoded))


__all__ = [
    "ExportRequest",
    "ShareRequest",
    "HtmlExporter",
    "ShareEncoder",
    "encode_share_payload",
    "decode_share_payload",
]
