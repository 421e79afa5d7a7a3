"""
Jotter Backend — Session Token Unit Tests
============================================

What we test:
    ✅ A freshly issued token verifies back to the same user id
    ✅ Expired, tampered, foreign-key and garbage tokens verify to None
    ✅ A token whose subject is not a UUID verifies to None
"""

import uuid
from datetime import timedelta

from jose import jwt

from jotter.models.user import utcnow
from jotter.services.token_service import TokenService

SECRET = "unit-test-secret"


class TestTokenService:
    def setup_method(self):
        self.tokens = TokenService(secret=SECRET, expire_days=7)

    def test_issue_then_verify(self):
        user_id = uuid.uuid4()
        assert self.tokens.verify(self.tokens.issue(user_id)) == user_id

    def test_claims_carry_seven_day_lifetime(self):
        claims = jwt.decode(self.tokens.issue(uuid.uuid4()), SECRET, algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

    def test_expired_token(self):
        past = utcnow() - timedelta(days=8)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "iat": int(past.timestamp()), "exp": int((past + timedelta(days=7)).timestamp())},
            SECRET,
            algorithm="HS256",
        )
        assert self.tokens.verify(token) is None

    def test_wrong_secret(self):
        other = TokenService(secret="someone-else")
        assert self.tokens.verify(other.issue(uuid.uuid4())) is None

    def test_tampered_token(self):
        token = self.tokens.issue(uuid.uuid4())
        header, payload, signature = token.split(".")
        flipped = "A" if signature[0] != "A" else "B"
        assert self.tokens.verify(f"{header}.{payload}.{flipped}{signature[1:]}") is None

    def test_garbage(self):
        assert self.tokens.verify("not.a.jwt") is None
        assert self.tokens.verify("") is None

    def test_non_uuid_subject(self):
        token = jwt.encode({"sub": "42"}, SECRET, algorithm="HS256")
        assert self.tokens.verify(token) is None

    def test_missing_subject(self):
        token = jwt.encode({"exp": int((utcnow() + timedelta(hours=1)).timestamp())}, SECRET, algorithm="HS256")
        assert self.tokens.verify(token) is None
