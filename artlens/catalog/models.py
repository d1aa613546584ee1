"""Catalog entries as read from the catalog store."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class CatalogTranslation(BaseModel):
    title: str
    description: str = ""


class CatalogEntry(BaseModel):
    """A known artwork. Read-only inside the pipeline."""

    id: str
    title: str
    artist_name: str
    year: Optional[str] = None
    period: Optional[str] = None
    description: str = ""
    category_id: Optional[str] = None
    country: Optional[str] = None
    translations: dict[str, CatalogTranslation] = Field(default_factory=dict)

    def localized(self, language: str) -> CatalogEntry:
        """Copy with title and description taken from the ``language`` translation, if any."""
        translation = self.translations.get(language)
        if translation is None:
            return self
        return self.model_copy(update={
            "title": translation.title,
            "description": translation.description or self.description,
        })
