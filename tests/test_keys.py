"""Tests for keying and hashing layer."""

import hashlib

from sysvista.keys import (
    ID_LENGTH,
    component_key,
    hash_id,
    make_id,
    workflow_id,
    workflow_key,
)


class TestKeyFormats:
    """Test key string formats."""

    def test_component_key_format(self):
        result = component_key("model", "User", "src/models/user.ts")
        assert result == "model:User:src/models/user.ts"

    def test_workflow_key_format(self):
        assert workflow_key("abc123") == "workflow:abc123"


class TestHashId:
    """Test the short sha256 ids."""

    def test_matches_sha256_prefix(self):
        expected = hashlib.sha256(b"model:User:src/a.ts").hexdigest()[:16]
        assert hash_id("model:User:src/a.ts") == expected

    def test_length_and_alphabet(self):
        result = hash_id("anything")
        assert len(result) == ID_LENGTH
        assert all(c in "0123456789abcdef" for c in result)

    def test_stable(self):
        assert hash_id("test_key") == hash_id("test_key")


class TestComponentIds:
    """Component ids depend only on (kind, name, file)."""

    def test_make_id_uses_component_key(self):
        assert make_id("service", "UserService", "src/a.ts") == hash_id(
            "service:UserService:src/a.ts"
        )

    def test_kind_changes_id(self):
        assert make_id("model", "User", "a.py") != make_id(
            "service", "User", "a.py"
        )

    def test_file_changes_id(self):
        assert make_id("model", "User", "a.py") != make_id(
            "model", "User", "b.py"
        )

    def test_workflow_id(self):
        assert workflow_id("abc") == hash_id("workflow:abc")
        assert workflow_id("abc") != hash_id("abc")
