"""
Leaf Codec Unit Tests
Tests for core/merkle/leaf_codec.py
"""
import pytest
from eth_abi import encode

from core.crypto.hashing import keccak256
from core.merkle.leaf_codec import (
    MAX_AMOUNT,
    encode_allocation,
    leaf_hash,
    normalize_recipient,
)


ADDR_LOWER = "0x" + "ab" * 20


class TestNormalizeRecipient:

    def test_checksum_form(self):
        normalized = normalize_recipient(ADDR_LOWER)
        assert normalized.lower() == ADDR_LOWER
        assert normalized != ADDR_LOWER

    def test_idempotent(self):
        once = normalize_recipient(ADDR_LOWER)
        assert normalize_recipient(once) == once

    def test_case_insensitive(self):
        assert normalize_recipient(ADDR_LOWER.upper().replace("0X", "0x")) == normalize_recipient(ADDR_LOWER)

    def test_rejects_short_address(self):
        with pytest.raises(ValueError):
            normalize_recipient("0x1234")


class TestEncodeAllocation:

    def test_fixed_width(self):
        assert len(encode_allocation(ADDR_LOWER, 1)) == 64

    def test_matches_abi_encode(self):
        expected = encode(["address", "uint256"], [normalize_recipient(ADDR_LOWER), 42])
        assert encode_allocation(ADDR_LOWER, 42) == expected

    def test_address_left_padded(self):
        encoded = encode_allocation(ADDR_LOWER, 0)
        assert encoded[:12] == bytes(12)
        assert encoded[12:32] == bytes.fromhex("ab" * 20)

    def test_amount_big_endian(self):
        encoded = encode_allocation(ADDR_LOWER, 258)
        assert encoded[32:] == (258).to_bytes(32, "big")

    def test_max_amount(self):
        encoded = encode_allocation(ADDR_LOWER, MAX_AMOUNT)
        assert encoded[32:] == b"\xff" * 32

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            encode_allocation(ADDR_LOWER, -1)

    def test_overflow_rejected(self):
        with pytest.raises(ValueError):
            encode_allocation(ADDR_LOWER, MAX_AMOUNT + 1)

    def test_bool_amount_rejected(self):
        with pytest.raises(ValueError):
            encode_allocation(ADDR_LOWER, True)

    def test_float_amount_rejected(self):
        with pytest.raises(ValueError):
            encode_allocation(ADDR_LOWER, 1.0)


class TestLeafHash:

    def test_double_hashed(self):
        encoded = encode_allocation(ADDR_LOWER, 100)
        assert leaf_hash(ADDR_LOWER, 100) == keccak256(keccak256(encoded))

    def test_not_single_hashed(self):
        encoded = encode_allocation(ADDR_LOWER, 100)
        assert leaf_hash(ADDR_LOWER, 100) != keccak256(encoded)

    def test_address_spelling_irrelevant(self):
        assert leaf_hash(ADDR_LOWER, 5) == leaf_hash(normalize_recipient(ADDR_LOWER), 5)

    def test_amount_changes_leaf(self):
        assert leaf_hash(ADDR_LOWER, 5) != leaf_hash(ADDR_LOWER, 6)
