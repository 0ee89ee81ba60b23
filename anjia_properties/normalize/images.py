# anjia_properties/normalize/images.py

"""Image URL extraction for raw property payloads.

WordPress exposes listing photos in many places depending on which plugin
version saved the post: the embedded featured media attachment, ACF
gallery fields under several names, a plain ``images`` array, or a single
featured image URL.  :func:`resolve_images` walks all of them in a fixed
order, keeps the first occurrence of every URL, and always ends the list
with the placeholder image so the front end has something to show when
the real photos fail to load.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from anjia_properties.config.settings import Settings
from anjia_properties.models.raw_record import RawRecord, RecordKind
from anjia_properties.normalize.fields import CUSTOM_FIELD_CONTAINERS

logger = logging.getLogger("anjia.normalize")

GALLERY_FIELDS: tuple[str, ...] = (
    "images",
    "property_images",
    "gallery",
    "image_gallery",
    "property_gallery",
    "gallery_images",
)
FEATURED_FIELDS: tuple[str, ...] = ("featured_image", "featured_media_url")

# Preferred WordPress size variants, largest useful first
_SIZE_VARIANTS: tuple[str, ...] = ("large", "full", "medium_large", "medium")


def _url_from_sizes(sizes: Any) -> str:
    """Pick a URL out of an ACF ``sizes`` or WP ``media_details.sizes`` map."""
    if not isinstance(sizes, Mapping):
        return ""
    for variant in _SIZE_VARIANTS:
        candidate = sizes.get(variant)
        if isinstance(candidate, str) and candidate:
            return candidate
        if isinstance(candidate, Mapping):
            url = candidate.get("source_url") or candidate.get("url")
            if isinstance(url, str) and url:
                return url
    return ""


def extract_url(candidate: Any) -> str:
    """Return the image URL held by *candidate*, or ``""``.

    Plain strings are URLs already.  Attachment objects are probed for
    ``url``, ``source_url``, ``link``, then size variant keys on the
    object itself (dashboard uploads store ``{"large": ...}``), then the
    ``sizes`` maps.  Bare attachment ids (integers) cannot be resolved
    without another request and are skipped.
    """
    if isinstance(candidate, str):
        return candidate.strip()
    if not isinstance(candidate, Mapping):
        return ""
    for key in ("url", "source_url", "link"):
        value = candidate.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    url = _url_from_sizes(candidate) or _url_from_sizes(candidate.get("sizes"))
    if url:
        return url
    details = candidate.get("media_details")
    if isinstance(details, Mapping):
        return _url_from_sizes(details.get("sizes"))
    return ""


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if value:
        return [value]
    return []


def _custom_fields(raw: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    for container in CUSTOM_FIELD_CONTAINERS:
        fields = raw.get(container)
        if isinstance(fields, Mapping):
            yield fields


def iter_candidates(raw: Mapping[str, Any]) -> Iterator[Any]:
    """Yield image candidates in priority order."""
    embedded = raw.get("_embedded")
    if isinstance(embedded, Mapping):
        yield from _as_list(embedded.get("wp:featuredmedia"))

    for fields in _custom_fields(raw):
        for name in GALLERY_FIELDS:
            yield from _as_list(fields.get(name))

    for name in GALLERY_FIELDS:
        yield from _as_list(raw.get(name))

    for name in FEATURED_FIELDS:
        yield from _as_list(raw.get(name))
    for fields in _custom_fields(raw):
        for name in FEATURED_FIELDS:
            yield from _as_list(fields.get(name))


def absolutize(url: str, host: str) -> str:
    """Turn a root-relative path into an absolute URL on *host*."""
    if url.startswith("/") and not url.startswith("//"):
        return f"{host.rstrip('/')}{url}"
    return url


def resolve_images(
    raw: Any,
    host: str | None = None,
    placeholder: str | None = None,
    kind: RecordKind = RecordKind.CMS,
) -> list[str]:
    """Collect, deduplicate and absolutize the images of a raw payload.

    The result is never empty and its last element is always the
    placeholder path; real images, if any, precede it.  Root-relative
    paths are rewritten onto the CMS host only for CMS records; bundled
    records point at the front end's own public assets.
    """
    host = host or Settings.CMS_PUBLIC_HOST
    placeholder = placeholder or Settings.PLACEHOLDER_IMAGE

    if isinstance(raw, RawRecord):
        kind, raw = raw.kind, raw.payload
    rewrite = kind is RecordKind.CMS

    seen: dict[str, None] = {}
    if isinstance(raw, Mapping):
        for candidate in iter_candidates(raw):
            try:
                url = extract_url(candidate)
            except Exception:
                logger.debug("Skipping unreadable image candidate", exc_info=True)
                continue
            if not url or url == placeholder:
                continue
            seen.setdefault(absolutize(url, host) if rewrite else url, None)

    images = [url for url in seen if url != placeholder]
    images.append(placeholder)
    return images
