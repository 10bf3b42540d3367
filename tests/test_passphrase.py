"""Tests for BIP-39 claim passphrases."""

import pytest
from mnemonic import Mnemonic

from lightsats.passphrase import UpdateTipRequest, generate_passphrase, get_updated_passphrase

WORDS = set(Mnemonic("english").wordlist)


class TestGeneratePassphrase:
    def test_word_count(self) -> None:
        assert len(generate_passphrase(6).split(" ")) == 6

    def test_words_from_wordlist(self) -> None:
        assert set(generate_passphrase(24).split(" ")) <= WORDS

    def test_words_distinct(self) -> None:
        words = generate_passphrase(100).split(" ")
        assert len(set(words)) == 100

    def test_zero_length(self) -> None:
        assert generate_passphrase(0) == ""

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            generate_passphrase(-1)

    def test_rejects_longer_than_wordlist(self) -> None:
        with pytest.raises(ValueError):
            generate_passphrase(2049)


class TestGetUpdatedPassphrase:
    def test_not_requested_clears(self) -> None:
        request = UpdateTipRequest(generate_passphrase=False, passphrase_length=4)
        assert get_updated_passphrase("abandon ability able about", request) is None

    def test_keeps_existing_with_matching_length(self) -> None:
        existing = "abandon ability able about"
        request = UpdateTipRequest(generate_passphrase=True, passphrase_length=4)
        assert get_updated_passphrase(existing, request) == existing

    def test_regenerates_on_length_change(self) -> None:
        request = UpdateTipRequest(generate_passphrase=True, passphrase_length=6)
        result = get_updated_passphrase("abandon ability able about", request)
        assert result is not None
        assert len(result.split(" ")) == 6

    def test_generates_when_missing(self) -> None:
        request = UpdateTipRequest(generate_passphrase=True, passphrase_length=3)
        result = get_updated_passphrase(None, request)
        assert result is not None
        assert set(result.split(" ")) <= WORDS
