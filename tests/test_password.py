"""
Tests for bcrypt password hashing.
"""

import pytest

from auth.password import (
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)


class TestPasswordHashing:
    def test_hash_verifies(self):
        digest = hash_password("hunter22", rounds=4)
        assert digest != "hunter22"
        assert verify_password("hunter22", digest)

    def test_wrong_password_rejected(self):
        digest = hash_password("hunter22", rounds=4)
        assert not verify_password("hunter23", digest)

    def test_salted_digests_differ(self):
        first = hash_password("same-password", rounds=4)
        second = hash_password("same-password", rounds=4)
        assert first != second
        assert verify_password("same-password", first)
        assert verify_password("same-password", second)

    def test_work_factor_embedded(self):
        digest = hash_password("hunter22", rounds=5)
        assert digest.startswith("$2b$05$")

    def test_malformed_digest_is_false(self):
        assert verify_password("hunter22", "not-a-bcrypt-hash") is False

    def test_long_password_truncated_consistently(self):
        long_password = "x" * 100
        digest = hash_password(long_password, rounds=4)
        assert verify_password(long_password, digest)

    @pytest.mark.asyncio
    async def test_async_wrappers(self):
        digest = await hash_password_async("hunter22", rounds=4)
        assert await verify_password_async("hunter22", digest)
        assert not await verify_password_async("nope", digest)
