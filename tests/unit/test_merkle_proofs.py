"""
Merkle Proof Unit Tests
Tests for merkle_validation/merkle/merkle_proofs.py

Covers:
1. Proof verification for every index across many tree sizes
2. Orientation and self-pairing on odd layers
3. Tamper detection (leaf, sibling, root, truncation)
4. Malformed proofs raise; mismatches return False
"""
import pytest

from fixtures.common import flip_byte, make_leaves, make_records

from merkle_validation.config.runtime import MerkleConfig, set_default_config
from merkle_validation.crypto.hashing import Hasher, sha256, to_hex
from merkle_validation.merkle.merkle_proofs import (
    Direction,
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    ProofStep,
    compute_root_from_proof,
    generate_proof,
    verify_proof,
    verify_proof_hex,
)
from merkle_validation.merkle.merkle_tree import MerkleTree
from merkle_validation.schemas.errors import (
    ErrorCodes,
    IndexOutOfBoundsException,
    MalformedProofException,
)


class TestProofVerification:
    """Tests for proof generation and verification."""

    def test_every_index_verifies_across_sizes(self, hasher):
        for count in range(1, 34):
            leaves = make_leaves(count)
            tree = MerkleTree.build(leaves, hasher)
            for i, leaf in enumerate(leaves):
                proof = generate_proof(tree, i)
                assert verify_proof(leaf, proof, tree.root, hasher), (count, i)

    def test_proof_length_equals_height(self):
        for count in (1, 2, 3, 5, 8, 13):
            tree = MerkleTree.build(make_leaves(count))
            for i in range(count):
                assert len(tree.proof(i)) == tree.height

    def test_tree_proof_method_matches_function(self, seven_tree):
        assert seven_tree.proof(3) == generate_proof(seven_tree, 3)

    def test_compute_root_from_proof(self, seven_tree, seven_leaves):
        proof = seven_tree.proof(5)
        assert compute_root_from_proof(seven_leaves[5], proof, seven_tree.hasher) == seven_tree.root

    def test_leaf_index_implied_by_orientation(self):
        for count in (2, 5, 7, 16):
            tree = MerkleTree.build(make_leaves(count))
            for i in range(count):
                assert tree.proof(i).leaf_index == i

    def test_proof_is_independent_of_tree(self, seven_leaves):
        proof = MerkleTree.build(seven_leaves).proof(2)
        root = MerkleTree.build(seven_leaves).root

        assert verify_proof(seven_leaves[2], proof, root)

    def test_verify_hex_root(self, abc_tree):
        assert verify_proof_hex(b"a", abc_tree.proof(0), abc_tree.root_hex)
        assert not verify_proof_hex(b"a", abc_tree.proof(0), to_hex(sha256(b"other")))


class TestSingleLeaf:
    """Tests for single-leaf proofs."""

    def test_empty_proof(self):
        tree = MerkleTree.build([b"only"])
        proof = tree.proof(0)

        assert len(proof) == 0
        assert proof.steps == ()
        assert verify_proof(b"only", proof, tree.root)

    def test_empty_proof_only_valid_for_leaf_hash_root(self, hasher):
        proof = MerkleProof()

        assert verify_proof(b"x", proof, hasher.leaf_hash(b"x"), hasher)
        assert not verify_proof(b"x", proof, hasher.leaf_hash(b"y"), hasher)
        assert not verify_proof(b"x", proof, sha256(b"x"), hasher)


class TestOrientation:
    """Tests for sibling orientation and odd-layer self-pairing."""

    def test_three_leaf_proofs(self, abc_tree, hasher):
        a, b, c = abc_tree.layer(0)
        ab, cc = abc_tree.layer(1)

        assert abc_tree.proof(0).steps == (
            ProofStep(sibling=b, direction=Direction.RIGHT),
            ProofStep(sibling=cc, direction=Direction.RIGHT),
        )
        assert abc_tree.proof(1).steps == (
            ProofStep(sibling=a, direction=Direction.LEFT),
            ProofStep(sibling=cc, direction=Direction.RIGHT),
        )

    def test_unmatched_last_node_pairs_with_itself(self, abc_tree):
        c = abc_tree.leaf_hash(2)
        ab = abc_tree.layer(1)[0]

        assert abc_tree.proof(2).steps == (
            ProofStep(sibling=c, direction=Direction.RIGHT),
            ProofStep(sibling=ab, direction=Direction.LEFT),
        )

    def test_self_pairing_on_higher_layer(self):
        """In a five-leaf tree the fifth leaf pairs with itself twice."""
        tree = MerkleTree.build(make_leaves(5))
        proof = tree.proof(4)

        assert proof.siblings[0] == tree.leaf_hash(4)
        assert proof.siblings[1] == tree.layer(1)[2]
        assert proof.directions == [Direction.RIGHT, Direction.RIGHT, Direction.LEFT]

    def test_all_abc_proofs_verify(self, abc_tree, abc_leaves):
        for i, leaf in enumerate(abc_leaves):
            assert verify_proof(leaf, abc_tree.proof(i), abc_tree.root)

    def test_flipped_orientation_fails(self, seven_tree, seven_leaves):
        proof = seven_tree.proof(2)
        flipped = MerkleProof(steps=tuple(
            ProofStep(
                sibling=step.sibling,
                direction=Direction.LEFT if step.direction == Direction.RIGHT else Direction.RIGHT,
            )
            for step in proof.steps
        ))

        assert not verify_proof(seven_leaves[2], flipped, seven_tree.root)

    def test_proof_for_other_leaf_fails(self, seven_tree, seven_leaves):
        assert not verify_proof(seven_leaves[1], seven_tree.proof(2), seven_tree.root)


class TestTamperDetection:
    """Tests for tamper detection (mismatches return False)."""

    def test_single_byte_leaf_mutation_fails(self):
        leaves = make_leaves(6)
        tree = MerkleTree.build(leaves)

        for i, leaf in enumerate(leaves):
            proof = tree.proof(i)
            for position in range(len(leaf)):
                assert not verify_proof(flip_byte(leaf, position), proof, tree.root)

    def test_tampered_sibling_fails(self, seven_tree, seven_leaves):
        proof = seven_tree.proof(1)
        steps = list(proof.steps)
        steps[0] = ProofStep(sibling=sha256(b"tampered"), direction=steps[0].direction)

        assert not verify_proof(seven_leaves[1], MerkleProof(steps=tuple(steps)), seven_tree.root)

    def test_tampered_root_fails(self, seven_tree, seven_leaves):
        assert not verify_proof(seven_leaves[0], seven_tree.proof(0), sha256(b"wrong root"))

    def test_missing_step_fails(self, seven_tree, seven_leaves):
        proof = seven_tree.proof(3)
        truncated = MerkleProof(steps=proof.steps[:-1])

        assert not verify_proof(seven_leaves[3], truncated, seven_tree.root)

    def test_leaf_hash_instead_of_leaf_fails(self, seven_tree):
        """The verifier hashes the leaf itself; passing its hash does not verify."""
        proof = seven_tree.proof(0)

        assert not verify_proof(seven_tree.leaf_hash(0), proof, seven_tree.root)

    def test_wrong_hasher_fails(self, seven_leaves):
        tree = MerkleTree.build(seven_leaves, Hasher(algorithm="sha256"))

        assert not verify_proof(
            seven_leaves[0], tree.proof(0), tree.root, Hasher(algorithm="sha3_256"),
        )


class TestIndexErrors:
    """Tests for out-of-range proof requests."""

    def test_one_past_end(self, abc_tree):
        with pytest.raises(IndexOutOfBoundsException) as exc_info:
            generate_proof(abc_tree, 3)

        assert exc_info.value.code == ErrorCodes.INDEX_OUT_OF_BOUNDS
        assert exc_info.value.details == {"index": 3, "leaf_count": 3}

    def test_negative_and_large(self, abc_tree):
        with pytest.raises(IndexOutOfBoundsException):
            generate_proof(abc_tree, -1)
        with pytest.raises(IndexOutOfBoundsException):
            generate_proof(abc_tree, 100)

    def test_is_an_index_error(self, abc_tree):
        with pytest.raises(IndexError):
            abc_tree.proof(3)

    def test_non_int_index(self, abc_tree):
        with pytest.raises(TypeError):
            generate_proof(abc_tree, 1.0)
        with pytest.raises(TypeError):
            generate_proof(abc_tree, True)


class TestMalformedProofs:
    """Tests for structurally invalid proofs."""

    def test_invalid_orientation(self, abc_tree):
        proof = MerkleProof(steps=(ProofStep(sibling=abc_tree.leaf_hash(1), direction="up"),))

        with pytest.raises(MalformedProofException) as exc_info:
            verify_proof(b"a", proof, abc_tree.root)

        assert exc_info.value.code == ErrorCodes.MALFORMED_PROOF
        assert exc_info.value.details["step"] == 0

    def test_plain_string_orientation_rejected(self, abc_tree):
        proof = MerkleProof(steps=(ProofStep(sibling=abc_tree.leaf_hash(1), direction="right"),))

        with pytest.raises(MalformedProofException):
            verify_proof(b"a", proof, abc_tree.root)

    def test_wrong_sibling_width(self, abc_tree):
        proof = MerkleProof(steps=(ProofStep(sibling=b"\x00" * 31, direction=Direction.RIGHT),))

        with pytest.raises(MalformedProofException, match="32 bytes"):
            verify_proof(b"a", proof, abc_tree.root)

    def test_too_long(self, hasher):
        step = ProofStep(sibling=b"\x00" * 32, direction=Direction.LEFT)
        proof = MerkleProof(steps=(step,) * 65)

        with pytest.raises(MalformedProofException, match="maximum"):
            verify_proof(b"a", proof, b"\x00" * 32, hasher)

    def test_configured_max_length(self, seven_tree, seven_leaves):
        set_default_config(MerkleConfig(max_proof_length=2))

        with pytest.raises(MalformedProofException):
            verify_proof(seven_leaves[0], seven_tree.proof(0), seven_tree.root)

    def test_explicit_max_length(self, seven_tree, seven_leaves):
        proof = seven_tree.proof(0)

        assert verify_proof(seven_leaves[0], proof, seven_tree.root, max_proof_length=3)
        with pytest.raises(MalformedProofException):
            verify_proof(seven_leaves[0], proof, seven_tree.root, max_proof_length=2)

    def test_not_a_proof(self, abc_tree):
        with pytest.raises(MalformedProofException):
            verify_proof(b"a", [abc_tree.leaf_hash(1)], abc_tree.root)

    def test_is_a_value_error(self, abc_tree):
        proof = MerkleProof(steps=(ProofStep(sibling=b"", direction=Direction.LEFT),))

        with pytest.raises(ValueError):
            verify_proof(b"a", proof, abc_tree.root)

    @pytest.mark.parametrize("leaf", [3, "\x00\x00\x00", None])
    def test_non_bytes_leaf_rejected(self, hasher, leaf):
        tree = MerkleTree.build([b"\x00\x00\x00", b"b"], hasher)
        proof = tree.proof(0)

        with pytest.raises(TypeError, match="bytes-like"):
            compute_root_from_proof(leaf, proof, hasher)
        with pytest.raises(TypeError, match="bytes-like"):
            verify_proof(leaf, proof, tree.root, hasher)


class TestMerkleProofValue:

    def test_steps_stored_as_tuple(self, abc_tree):
        steps = list(abc_tree.proof(0).steps)
        proof = MerkleProof(steps=steps)

        assert isinstance(proof.steps, tuple)
        assert proof == abc_tree.proof(0)

    def test_iteration(self, abc_tree):
        proof = abc_tree.proof(1)
        assert list(proof) == list(proof.steps)

    def test_direction_values(self):
        assert Direction.LEFT.value == "left"
        assert Direction("right") is Direction.RIGHT


class TestConvenienceClasses:
    """Tests for MerkleProver and MerkleVerifier classes."""

    def test_prover_prove(self):
        leaves = make_leaves(4)
        proof = MerkleProver.prove(leaves, 2)
        root = MerkleProver.compute_root(leaves)

        assert MerkleVerifier.verify(leaves[2], proof, root)

    def test_prover_compute_root(self):
        leaves = make_leaves(5)
        assert MerkleProver.compute_root(leaves) == MerkleTree.build(leaves).root

    def test_prove_object_and_verify_object(self):
        records = make_records(4)
        proof = MerkleProver.prove_object(records, 1)
        root = MerkleTree.from_objects(records).root

        assert MerkleVerifier.verify_object(records[1], proof, root)
        assert MerkleVerifier.verify_object(dict(reversed(list(records[1].items()))), proof, root)
        assert not MerkleVerifier.verify_object(records[2], proof, root)
