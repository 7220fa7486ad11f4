"""
Allocation Tree and Proof Bundle Unit Tests
Tests for core/merkle/allocation_tree.py, core/schemas/allocation.py
and core/schemas/bundle.py
"""
import json
import random

import pytest
from pydantic import ValidationError

from core.crypto.hashing import to_hex
from core.merkle.allocation_tree import AllocationTree
from core.merkle.leaf_codec import MAX_AMOUNT, leaf_hash
from core.merkle.merkle_tree import build_merkle_root
from core.schemas.allocation import Allocation
from core.schemas.bundle import ClaimProof, ProofBundle
from core.schemas.errors import AllocationException

from fixtures.common import make_address, make_allocations


class TestAllocation:

    def test_recipient_normalized(self):
        allocation = Allocation(recipient=make_address(1).lower(), amount=5)
        assert allocation.recipient == make_address(1)

    def test_leaf(self):
        allocation = Allocation(recipient=make_address(1), amount=5)
        assert allocation.leaf == leaf_hash(make_address(1), 5)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Allocation(recipient=make_address(1), amount=-1)

    def test_overflow_rejected(self):
        with pytest.raises(ValidationError):
            Allocation(recipient=make_address(1), amount=MAX_AMOUNT + 1)

    def test_bad_address_rejected(self):
        with pytest.raises(ValidationError):
            Allocation(recipient="0x1234", amount=1)

    def test_frozen(self):
        allocation = Allocation(recipient=make_address(1), amount=5)
        with pytest.raises(ValidationError):
            allocation.amount = 6


class TestAllocationTree:

    def test_root_matches_leaf_set(self, allocations):
        tree = AllocationTree.from_allocations(allocations)
        assert tree.root == build_merkle_root([a.leaf for a in allocations])

    def test_input_order_irrelevant(self):
        allocations = make_allocations([5, 10, 15, 20, 25, 30, 35])
        shuffled = list(allocations)
        random.Random(7).shuffle(shuffled)
        assert (
            AllocationTree.from_allocations(allocations).root
            == AllocationTree.from_allocations(shuffled).root
        )

    def test_totals(self, allocations):
        tree = AllocationTree.from_allocations(allocations)
        assert tree.total_amount == 600
        assert tree.total_claimants == 3

    def test_empty_rejected(self):
        with pytest.raises(AllocationException, match="zero allocations"):
            AllocationTree.from_allocations([])

    def test_duplicate_recipient_rejected(self):
        allocations = [
            Allocation(recipient=make_address(1), amount=1),
            Allocation(recipient=make_address(1).lower(), amount=2),
        ]
        with pytest.raises(AllocationException, match="more than once"):
            AllocationTree.from_allocations(allocations)

    def test_get_any_spelling(self, tree, allocations):
        assert tree.get(allocations[0].recipient.lower()) == allocations[0]

    def test_get_unknown(self, tree):
        assert tree.get(make_address(999)) is None
        assert tree.get("garbage") is None

    def test_proof_for_unknown(self, tree):
        with pytest.raises(KeyError):
            tree.proof_for(make_address(999))

    def test_zero_amount_allowed(self):
        tree = AllocationTree.from_allocations(make_allocations([0, 7]))
        assert tree.total_amount == 7


class TestProofBundle:

    def test_to_bundle(self, tree, allocations):
        bundle = tree.to_bundle()
        assert bundle.root == to_hex(tree.root)
        assert bundle.total_amount == "600"
        assert bundle.total_claimants == 3
        assert set(bundle.claims) == {a.recipient for a in allocations}
        assert bundle.consistency_errors() == []

    def test_wire_format_keys(self, tree):
        data = json.loads(tree.to_bundle().to_json())
        assert set(data) == {"root", "totalAmount", "totalClaimants", "claims"}
        claim = next(iter(data["claims"].values()))
        assert set(claim) == {"amount", "proof"}
        assert isinstance(claim["amount"], str)

    def test_json_reload(self, tree):
        bundle = tree.to_bundle()
        assert ProofBundle.model_validate_json(bundle.to_json()) == bundle

    def test_accepts_merkle_root_key(self, tree):
        data = json.loads(tree.to_bundle().to_json())
        data["merkleRoot"] = data.pop("root")
        bundle = ProofBundle.model_validate(data)
        assert bundle.root == to_hex(tree.root)

    def test_get_claim_any_spelling(self, tree, allocations):
        bundle = tree.to_bundle()
        claim = bundle.get_claim(allocations[2].recipient.lower())
        assert claim is not None
        assert claim.amount_value == 300

    def test_get_claim_invalid_address(self, tree):
        assert tree.to_bundle().get_claim("nope") is None

    def test_lowercase_keys_normalized(self, tree):
        data = json.loads(tree.to_bundle().to_json())
        data["claims"] = {k.lower(): v for k, v in data["claims"].items()}
        bundle = ProofBundle.model_validate(data)
        assert bundle.consistency_errors() == []

    def test_duplicate_keys_rejected(self):
        lettered = Allocation(recipient="0x" + "ab" * 20, amount=5)
        tree = AllocationTree.from_allocations([lettered, Allocation(recipient=make_address(1), amount=7)])
        data = json.loads(tree.to_bundle().to_json())

        recipient = lettered.recipient
        assert recipient.lower() != recipient
        data["claims"][recipient.lower()] = data["claims"][recipient]
        assert len(data["claims"]) == 3
        with pytest.raises(ValidationError, match="Duplicate"):
            ProofBundle.model_validate(data)

    def test_amount_above_uint256_rejected(self, tree, allocations):
        data = json.loads(tree.to_bundle().to_json())
        data["claims"][allocations[0].recipient]["amount"] = str(MAX_AMOUNT + 1)
        with pytest.raises(ValidationError, match="uint256"):
            ProofBundle.model_validate(data)

    def test_total_above_uint256_rejected(self, tree):
        data = json.loads(tree.to_bundle().to_json())
        data["totalAmount"] = str(2**256)
        with pytest.raises(ValidationError, match="uint256"):
            ProofBundle.model_validate(data)

    def test_max_amount_accepted(self):
        claim = ClaimProof(amount=str(MAX_AMOUNT))
        assert claim.amount_value == MAX_AMOUNT
        assert ClaimProof(amount="000" + str(MAX_AMOUNT)).amount_value == MAX_AMOUNT

    def test_bad_root_rejected(self, tree):
        data = json.loads(tree.to_bundle().to_json())
        data["root"] = "0x1234"
        with pytest.raises(ValidationError):
            ProofBundle.model_validate(data)

    def test_bad_amount_rejected(self):
        with pytest.raises(ValidationError):
            ClaimProof(amount="-5", proof=[])

    def test_int_amount_accepted(self):
        assert ClaimProof(amount=5, proof=[]).amount == "5"

    def test_consistency_detects_bad_proof(self, tree, allocations):
        data = json.loads(tree.to_bundle().to_json())
        data["claims"][allocations[0].recipient]["amount"] = "101"
        data["totalAmount"] = "601"
        bundle = ProofBundle.model_validate(data)
        assert bundle.validate_against_root() == [allocations[0].recipient]
        assert len(bundle.consistency_errors()) == 1

    def test_consistency_detects_totals(self, tree):
        data = json.loads(tree.to_bundle().to_json())
        data["totalAmount"] = "1"
        data["totalClaimants"] = 9
        errors = ProofBundle.model_validate(data).consistency_errors()
        assert len(errors) == 2
