"""Tests for record identity and content fingerprints."""

from wakasource.core.idempotency import (
    create_content_digest,
    normalize_identifier_part,
    normalize_payload_for_hashing,
)


class TestContentDigest:
    """Digest stability."""

    def test_key_order_does_not_matter(self):
        first = {"name": "Rust", "total_seconds": 5400, "range": {"start": "a", "end": "b"}}
        second = {"range": {"end": "b", "start": "a"}, "total_seconds": 5400, "name": "Rust"}

        assert create_content_digest(first) == create_content_digest(second)

    def test_content_changes_digest(self):
        assert create_content_digest({"total_seconds": 1}) != create_content_digest({"total_seconds": 2})

    def test_digest_is_sha256_hex(self):
        digest = create_content_digest({"a": 1})

        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    def test_normalized_json_is_compact_and_sorted(self):
        assert normalize_payload_for_hashing({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_unicode_kept(self):
        assert normalize_payload_for_hashing({"name": "Café"}) == '{"name":"Café"}'


class TestIdentifierPart:
    """Name normalization for compound identifiers."""

    def test_strips_and_uppercases(self):
        assert normalize_identifier_part("VS Code") == "VSCODE"
        assert normalize_identifier_part("Objective-C") == "OBJECTIVEC"
        assert normalize_identifier_part("feature/x-2") == "FEATUREX2"

    def test_is_lossy(self):
        assert normalize_identifier_part("C++") == normalize_identifier_part("C") == "C"

    def test_non_ascii_is_stripped(self):
        assert normalize_identifier_part("Café") == "CAF"

    def test_only_symbols_gives_empty(self):
        assert normalize_identifier_part("++") == ""
