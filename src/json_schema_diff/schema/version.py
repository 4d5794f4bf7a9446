"""JsonSchemaVersion: supported JSON Schema drafts and their keyword semantics.

The loader consults the version to normalise draft-specific spellings
(``id`` vs ``$id``, boolean vs numeric exclusive bounds, ``dependencies`` vs
``dependentRequired``/``dependentSchemas``, array ``items`` vs
``prefixItems``) into one node shape, so the diff engine never needs to know
which draft a document was written against.
"""

from __future__ import annotations

from enum import StrEnum

__all__ = ["DEFAULT_VERSION", "JsonSchemaVersion"]


def _urls(path: str) -> tuple[str, ...]:
    return tuple(
        f"{scheme}://json-schema.org/{path}{suffix}"
        for scheme in ("http", "https")
        for suffix in ("", "#")
    )


class JsonSchemaVersion(StrEnum):
    """Supported JSON Schema drafts.

    Each member maps to the ``$schema`` URLs it is detected from (see
    ``schema_urls``) and exposes the keyword semantics of that draft.
    """

    DRAFT_4 = "draft-04"
    DRAFT_6 = "draft-06"
    DRAFT_7 = "draft-07"
    DRAFT_2019_09 = "2019-09"
    DRAFT_2020_12 = "2020-12"

    @property
    def schema_urls(self) -> tuple[str, ...]:
        if self in (JsonSchemaVersion.DRAFT_2019_09, JsonSchemaVersion.DRAFT_2020_12):
            return _urls(f"draft/{self.value}/schema")
        return _urls(f"{self.value}/schema")

    @classmethod
    def from_schema_url(cls, url: str | None) -> JsonSchemaVersion | None:
        """Detect the draft from a ``$schema`` URL.

        Args:
            url: The ``$schema`` value.  A trailing ``#`` is ignored.

        Returns:
            The matching draft, or None when the URL is None or unknown.
        """
        if url is None:
            return None
        normalized = url[:-1] if url.endswith("#") else url
        return _URL_LOOKUP.get(normalized) or _URL_LOOKUP.get(url)

    @property
    def id_keyword(self) -> str:
        """``id`` for draft 4, ``$id`` for every later draft."""
        return "id" if self is JsonSchemaVersion.DRAFT_4 else "$id"

    @property
    def uses_numeric_exclusive_bounds(self) -> bool:
        """False for draft 4, where exclusive bounds are boolean modifiers."""
        return self is not JsonSchemaVersion.DRAFT_4

    @property
    def uses_prefix_items(self) -> bool:
        """True when tuple validation is spelled ``prefixItems`` (2020-12)."""
        return self is JsonSchemaVersion.DRAFT_2020_12

    @property
    def uses_dependent_keywords(self) -> bool:
        """True when ``dependentRequired``/``dependentSchemas`` replace ``dependencies``."""
        return self in (JsonSchemaVersion.DRAFT_2019_09, JsonSchemaVersion.DRAFT_2020_12)


_URL_LOOKUP: dict[str, JsonSchemaVersion] = {
    url: version for version in JsonSchemaVersion for url in version.schema_urls
}

DEFAULT_VERSION = JsonSchemaVersion.DRAFT_7
