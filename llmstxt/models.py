"""Shared dataclasses passed between the preparation and rendering stages."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from ._constants import UNTITLED


@dc.dataclass(frozen=True, slots=True)
class Document:
    """A prepared documentation page ready for chunking and rendering.

    Attributes
    ----------
    title : str
        Display title; never empty (``"Untitled"`` when nothing better exists).
    path : str
        Logical path the page is served at. Index pages below the source root
        are already mapped to ``<dir>.md``.
    body : str
        Markdown body without front matter.
    front_matter : Mapping[str, Any]
        Parsed front matter. Only ``description`` is read while rendering.
    """

    title: str
    path: str
    body: str = ""
    front_matter: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    def __post_init__(self) -> None:
        if not (self.title or "").strip():
            object.__setattr__(self, "title", UNTITLED)

    @property
    def description(self) -> str | None:
        """Return the stripped front matter description, if any."""
        value = self.front_matter.get("description")
        if value is None:
            return None
        text = str(value).strip()
        return text or None


@dc.dataclass(frozen=True, slots=True)
class SidebarItem:
    """A read-only node of a sidebar tree used to order the table of contents."""

    text: str | None = None
    link: str | None = None
    items: tuple[SidebarItem, ...] = ()

    @classmethod
    def from_mapping(
        cls, payload: cabc.Mapping[str, typ.Any], *, base: str | None = None
    ) -> SidebarItem:
        """Build an item (and its descendants) from a raw sidebar mapping.

        A ``base`` on the payload, or inherited from an ancestor, is prefixed
        to relative links the way the docs site resolves them.
        """
        item_base = payload.get("base") or base
        link = payload.get("link")
        if link and item_base:
            link = f"{item_base.rstrip('/')}/{str(link).lstrip('/')}"
        children = payload.get("items") or []
        return cls(
            text=_optional_text(payload.get("text")),
            link=str(link) if link else None,
            items=tuple(
                cls.from_mapping(child, base=item_base)
                for child in children
                if isinstance(child, cabc.Mapping)
            ),
        )


def _optional_text(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = ["Document", "SidebarItem"]
