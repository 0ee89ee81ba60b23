# tests/test_images.py

"""Tests for image candidate extraction and resolution."""

import unittest

from anjia_properties.config.settings import Settings
from anjia_properties.models.raw_record import RawRecord, RecordKind
from anjia_properties.normalize.images import (
    absolutize,
    extract_url,
    resolve_images,
)

HOST = "https://cms.example.com"
PLACEHOLDER = Settings.PLACEHOLDER_IMAGE


class TestExtractUrl(unittest.TestCase):
    """Tests for reading a URL out of one image candidate."""

    def test_string(self) -> None:
        """Plain strings are URLs, trimmed."""
        self.assertEqual(extract_url(" https://x/a.jpg "), "https://x/a.jpg")

    def test_object_keys_in_order(self) -> None:
        """url wins over source_url, which wins over link."""
        self.assertEqual(extract_url({"url": "u", "source_url": "s"}), "u")
        self.assertEqual(extract_url({"source_url": "s", "link": "l"}), "s")
        self.assertEqual(extract_url({"link": "l"}), "l")

    def test_own_size_variant_keys(self) -> None:
        """Size variant keys stored on the attachment itself are read."""
        self.assertEqual(extract_url({"large": "l.jpg", "full": "f.jpg"}), "l.jpg")
        self.assertEqual(extract_url({"full": {"url": "f.jpg"}}), "f.jpg")
        self.assertEqual(extract_url({"url": "u.jpg", "large": "l.jpg"}), "u.jpg")

    def test_acf_sizes(self) -> None:
        """ACF sizes maps prefer the large variant."""
        candidate = {"sizes": {"medium": "m.jpg", "large": "l.jpg"}}
        self.assertEqual(extract_url(candidate), "l.jpg")

    def test_media_details_sizes(self) -> None:
        """WP media_details size objects resolve via source_url."""
        candidate = {
            "media_details": {"sizes": {"full": {"source_url": "f.jpg"}}}
        }
        self.assertEqual(extract_url(candidate), "f.jpg")

    def test_attachment_id_is_skipped(self) -> None:
        """Bare attachment ids cannot be resolved."""
        self.assertEqual(extract_url(123), "")


class TestAbsolutize(unittest.TestCase):
    """Tests for root-relative path rewriting."""

    def test_root_relative(self) -> None:
        """A leading slash is joined onto the host without doubling it."""
        self.assertEqual(absolutize("/a.jpg", HOST + "/"), HOST + "/a.jpg")

    def test_protocol_relative_untouched(self) -> None:
        """Protocol-relative URLs are left alone."""
        self.assertEqual(absolutize("//cdn/a.jpg", HOST), "//cdn/a.jpg")

    def test_absolute_untouched(self) -> None:
        """Absolute URLs are left alone."""
        self.assertEqual(absolutize("https://x/a.jpg", HOST), "https://x/a.jpg")


class TestResolveImages(unittest.TestCase):
    """resolve_images is never empty and always ends with the placeholder."""

    def test_empty_payload_gives_placeholder_only(self) -> None:
        """No candidates at all yields just the placeholder."""
        self.assertEqual(resolve_images({}, HOST), [PLACEHOLDER])

    def test_non_mapping_gives_placeholder_only(self) -> None:
        """Junk payloads still yield the placeholder."""
        self.assertEqual(resolve_images("junk", HOST), [PLACEHOLDER])

    def test_priority_order(self) -> None:
        """Embedded media, custom galleries, top-level arrays, then featured."""
        raw = {
            "featured_image": "https://x/featured.jpg",
            "images": ["https://x/top.jpg"],
            "acf": {"gallery": [{"url": "https://x/acf.jpg"}]},
            "_embedded": {
                "wp:featuredmedia": [{"source_url": "https://x/embed.jpg"}]
            },
        }
        self.assertEqual(
            resolve_images(raw, HOST),
            [
                "https://x/embed.jpg",
                "https://x/acf.jpg",
                "https://x/top.jpg",
                "https://x/featured.jpg",
                PLACEHOLDER,
            ],
        )

    def test_every_gallery_field_is_checked(self) -> None:
        """Alternate gallery field names all contribute images."""
        raw = {
            "property_images": ["https://x/1.jpg"],
            "image_gallery": ["https://x/2.jpg"],
            "property_gallery": "https://x/3.jpg",
        }
        images = resolve_images(raw, HOST)
        self.assertEqual(len(images), 4)
        self.assertEqual(images[-1], PLACEHOLDER)

    def test_dashboard_gallery_images(self) -> None:
        """Top-level gallery_images entries in url or large shape are kept."""
        raw = {
            "id": 9,
            "gallery_images": [
                {"url": "https://wp.ajyxn.com/a.jpg"},
                {"large": "https://wp.ajyxn.com/b.jpg"},
                "https://wp.ajyxn.com/c.jpg",
            ],
        }
        self.assertEqual(
            resolve_images(raw, HOST),
            [
                "https://wp.ajyxn.com/a.jpg",
                "https://wp.ajyxn.com/b.jpg",
                "https://wp.ajyxn.com/c.jpg",
                PLACEHOLDER,
            ],
        )

    def test_deduplicates(self) -> None:
        """The same URL from several fields appears once."""
        raw = {
            "images": ["https://x/a.jpg", "https://x/a.jpg"],
            "featured_image": "https://x/a.jpg",
        }
        self.assertEqual(
            resolve_images(raw, HOST), ["https://x/a.jpg", PLACEHOLDER]
        )

    def test_relative_paths_absolutized(self) -> None:
        """CMS root-relative uploads are rewritten onto the CMS host."""
        raw = {"images": ["/uploads/a.jpg"]}
        self.assertEqual(
            resolve_images(raw, HOST),
            [HOST + "/uploads/a.jpg", PLACEHOLDER],
        )

    def test_bundled_paths_not_rewritten(self) -> None:
        """Static and fallback records keep their front end asset paths."""
        for kind in (RecordKind.STATIC, RecordKind.FALLBACK):
            with self.subTest(kind=kind):
                record = RawRecord(
                    kind=kind, payload={"images": ["/images/04/a.jpeg"]}
                )
                self.assertEqual(
                    resolve_images(record, HOST),
                    ["/images/04/a.jpeg", PLACEHOLDER],
                )

    def test_placeholder_not_duplicated_or_rewritten(self) -> None:
        """A placeholder among the candidates only appears once, last."""
        raw = {"images": [PLACEHOLDER, "https://x/a.jpg"]}
        self.assertEqual(
            resolve_images(raw, HOST), ["https://x/a.jpg", PLACEHOLDER]
        )

    def test_unwraps_raw_record(self) -> None:
        """A RawRecord is resolved through its payload."""
        record = RawRecord(
            kind=RecordKind.STATIC, payload={"images": ["https://x/a.jpg"]}
        )
        self.assertEqual(
            resolve_images(record, HOST), ["https://x/a.jpg", PLACEHOLDER]
        )


if __name__ == "__main__":
    unittest.main()
