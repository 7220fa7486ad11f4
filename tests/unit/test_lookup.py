"""
Claim Lookup Unit Tests
Tests for orchestrator/lookup.py
"""
import pytest
from eth_utils import keccak

from core.crypto.hashing import from_hex, to_hex
from core.merkle.leaf_codec import leaf_hash
from core.schemas.errors import BundleException
from orchestrator.generate import generate_distribution
from orchestrator.lookup import (
    CLAIM_SELECTOR,
    distribution_stats,
    encode_claim_calldata,
    format_amount,
    lookup_claim,
)

from fixtures.common import make_address, make_allocations


class TestFormatAmount:

    def test_ether(self):
        assert format_amount(1_500_000_000_000_000_000) == "1.5"

    def test_whole_ether(self):
        assert format_amount(2 * 10**18) == "2"

    def test_zero(self):
        assert format_amount(0) == "0"

    def test_wei(self):
        assert format_amount(42, "wei") == "42"

    def test_gwei(self):
        assert format_amount(1_000_000_000, "gwei") == "1"


class TestEncodeClaimCalldata:

    def test_selector(self):
        assert CLAIM_SELECTOR == keccak(text="claim(uint256,bytes32[])")[:4]

    def test_layout(self):
        siblings = [keccak(b"a"), keccak(b"b")]
        raw = from_hex(encode_claim_calldata(100, siblings))

        assert raw[:4] == CLAIM_SELECTOR
        words = [raw[4 + i * 32: 4 + (i + 1) * 32] for i in range((len(raw) - 4) // 32)]
        assert int.from_bytes(words[0], "big") == 100
        assert int.from_bytes(words[1], "big") == 64
        assert int.from_bytes(words[2], "big") == 2
        assert words[3:] == siblings

    def test_hex_siblings(self):
        siblings = [keccak(b"a")]
        assert encode_claim_calldata(5, siblings) == encode_claim_calldata(5, [to_hex(siblings[0])])

    def test_empty_proof(self):
        raw = from_hex(encode_claim_calldata(1, []))
        assert len(raw) == 4 + 3 * 32


class TestLookupClaim:

    def test_found(self, tree, allocations):
        bundle = tree.to_bundle()
        recipient = allocations[1].recipient
        info = lookup_claim(bundle, recipient.lower())

        assert info.recipient == recipient
        assert info.amount == 200
        assert info.proof == [to_hex(h) for h in tree.proof_for(recipient)]
        assert info.leaf == to_hex(leaf_hash(recipient, 200))
        assert info.valid
        assert info.calldata == encode_claim_calldata(200, info.proof)

    def test_not_eligible(self, tree):
        with pytest.raises(BundleException, match="not eligible"):
            lookup_claim(tree.to_bundle(), make_address(999))

    def test_invalid_address(self, tree):
        with pytest.raises(BundleException, match="Invalid address"):
            lookup_claim(tree.to_bundle(), "0xabc")

    def test_to_dict(self, tree, allocations):
        data = lookup_claim(tree.to_bundle(), allocations[0].recipient).to_dict("wei")
        assert data["amount"] == "100"
        assert data["amount_formatted"] == "100"
        assert data["valid"] is True


class TestDistributionStats:

    def test_totals(self, tree):
        stats = distribution_stats(tree.to_bundle())
        assert stats.total_amount == 600
        assert stats.total_claimants == 3
        assert stats.average_amount == 200
        assert stats.max_proof_length == 2

    def test_top_sorted_desc(self):
        bundle = generate_distribution(make_allocations([5, 50, 20, 40, 10, 30, 60])).bundle
        stats = distribution_stats(bundle)
        assert [amount for _, amount in stats.top_claimants] == [60, 50, 40, 30, 20]

    def test_top_limit(self, tree):
        assert len(distribution_stats(tree.to_bundle(), top=1).top_claimants) == 1
        assert distribution_stats(tree.to_bundle(), top=0).top_claimants == []

    def test_ties_broken_by_address(self):
        bundle = generate_distribution(make_allocations([7, 7, 7])).bundle
        recipients = [r for r, _ in distribution_stats(bundle).top_claimants]
        assert recipients == sorted(recipients)

    def test_to_dict(self, tree):
        data = distribution_stats(tree.to_bundle(), top=2).to_dict("wei")
        assert data["total_amount"] == "600"
        assert data["top_claimants"][0]["amount"] == "300"
