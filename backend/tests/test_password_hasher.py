"""
VerseNotes Backend — Password Hasher Tests
============================================
"""

import pytest

from versenotes.services.password_hasher import PasswordHasher


class TestPasswordHasher:

    @pytest.mark.asyncio
    async def test_hash_is_salted_and_verifiable(self, hasher):
        first = await hasher.hash("correct horse")
        second = await hasher.hash("correct horse")

        assert first != second  # fresh salt each time
        assert await hasher.verify("correct horse", first)
        assert await hasher.verify("correct horse", second)
        assert not await hasher.verify("wrong horse", first)

    def test_cost_factor_is_encoded_in_hash(self):
        hashed = PasswordHasher(rounds=5).hash_sync("pw")
        # "$2b$05$..." → cost 05
        assert hashed.split("$")[2] == "05"

    def test_long_password_round_trips(self, hasher):
        long_password = "x" * 200
        hashed = hasher.hash_sync(long_password)
        assert hasher.verify_sync(long_password, hashed)

    def test_non_ascii_password(self, hasher):
        hashed = hasher.hash_sync("pässwörd✓")
        assert hasher.verify_sync("pässwörd✓", hashed)
        assert not hasher.verify_sync("passwörd✓", hashed)

    def test_malformed_stored_hash_raises(self, hasher):
        with pytest.raises(ValueError):
            hasher.verify_sync("pw", "not-a-bcrypt-hash")
