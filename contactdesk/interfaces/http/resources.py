# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from contactdesk.interfaces.http.dto.records import (
    ContactSchema,
    DiarySchema,
    PortfolioSchema,
    RecordSchema,
)


@dataclass(slots=True, frozen=True)
class ResourceKind:
    """Route, validation schema and access rules of one record collection."""

    name: str
    path: str
    schema: type[RecordSchema]
    public_create: bool = True
    public_list: bool = False


CONTACT = ResourceKind(name="contact", path="contacts", schema=ContactSchema)
PORTFOLIO = ResourceKind(name="portfolio", path="portfolio", schema=PortfolioSchema)
DIARY = ResourceKind(
    name="diary",
    path="diary",
    schema=DiarySchema,
    public_create=False,
    public_list=True,
)

RESOURCE_KINDS: tuple[ResourceKind, ...] = (CONTACT, PORTFOLIO, DIARY)

__all__ = ["CONTACT", "DIARY", "PORTFOLIO", "RESOURCE_KINDS", "ResourceKind"]
