"""Tests for ContentHash."""

import pytest

from tencards.domain.common.value_objects import ContentHash


class TestContentHash:
    def test_compute_is_sha256_hex(self) -> None:
        """Should produce the SHA-256 hex digest."""
        assert (
            ContentHash.compute("abc").value
            == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_compute_trims_before_hashing(self) -> None:
        """Should fingerprint the trimmed text."""
        assert ContentHash.compute("  abc\n") == ContentHash.compute("abc")

    def test_same_text_same_fingerprint(self) -> None:
        text = "Mitochondria are the powerhouse of the cell. " * 30
        assert ContentHash.compute(text) == ContentHash.compute(text)

    def test_one_character_changes_fingerprint(self) -> None:
        text = "a" * 1000
        assert ContentHash.compute(text) != ContentHash.compute(text[:-1] + "b")

    @pytest.mark.parametrize("text", ["", "   \n\t"])
    def test_empty_text_raises(self, text: str) -> None:
        with pytest.raises(ValueError):
            ContentHash.compute(text)

    def test_rejects_malformed_value(self) -> None:
        with pytest.raises(ValueError):
            ContentHash("not-a-hash")
