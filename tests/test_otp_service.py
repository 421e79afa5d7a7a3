"""
Jotter Backend — OTP Service Unit Tests
==========================================

What we test:
    ✅ Codes are 6 digits in 100000..999999
    ✅ Issuing stamps expiry at now + TTL and overwrites a previous code
    ✅ Verification order: not pending → expired → mismatch → cleared
    ✅ Expiry is strict: a code submitted exactly at expiry still works
    ✅ Naive datetimes (as SQLite returns them) are treated as UTC
"""

from datetime import timedelta

import pytest

from jotter.exceptions import OTPExpiredError, OTPMismatchError, OTPNotPendingError
from jotter.models.user import User
from jotter.services.otp_service import OTPService


@pytest.fixture
def user():
    return User(name="Ada", email="ada@example.com", is_verified=False)


@pytest.fixture
def service(clock):
    return OTPService(ttl_minutes=10, clock=clock)


class TestIssue:
    def test_generated_codes_are_six_digits(self):
        for _ in range(200):
            code = OTPService.generate_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100_000 <= int(code) <= 999_999

    def test_issue_sets_code_and_expiry(self, service, user, clock):
        code = service.issue(user)
        assert user.otp == code
        assert user.otp_expiry == clock.now + timedelta(minutes=10)

    def test_reissue_overwrites(self, service, user, clock):
        service.issue(user)
        clock.advance(minutes=3)
        second = service.issue(user)
        assert user.otp == second
        assert user.otp_expiry == clock.now + timedelta(minutes=10)


class TestVerify:
    def test_success_clears_code(self, service, user):
        code = service.issue(user)
        service.verify(user, code)
        assert user.otp is None
        assert user.otp_expiry is None

    def test_surrounding_whitespace_ignored(self, service, user):
        code = service.issue(user)
        service.verify(user, f"  {code} ")
        assert user.otp is None

    def test_not_pending(self, service, user):
        with pytest.raises(OTPNotPendingError) as exc_info:
            service.verify(user, "123456")
        assert exc_info.value.message == "No OTP found. Please request a new OTP."

    def test_login_wording(self, service, user):
        with pytest.raises(OTPNotPendingError) as exc_info:
            service.verify(user, "123456", for_login=True)
        assert "new login OTP" in exc_info.value.message

    def test_expired_checked_before_mismatch(self, service, user, clock):
        service.issue(user)
        clock.advance(minutes=10, seconds=1)
        with pytest.raises(OTPExpiredError) as exc_info:
            service.verify(user, "000000")
        assert exc_info.value.message == "OTP has expired. Please request a new OTP."
        # a failed attempt leaves the code in place
        assert user.otp is not None

    def test_valid_exactly_at_expiry(self, service, user, clock):
        code = service.issue(user)
        clock.advance(minutes=10)
        service.verify(user, code)
        assert user.otp is None

    def test_mismatch(self, service, user):
        code = service.issue(user)
        wrong = "100000" if code != "100000" else "100001"
        with pytest.raises(OTPMismatchError) as exc_info:
            service.verify(user, wrong)
        assert exc_info.value.message == "Invalid OTP. Please check and try again."
        assert user.otp == code

    @pytest.mark.parametrize("submitted", ["１２３４５６", "12345é", "１"])
    def test_non_ascii_submission_is_mismatch(self, service, user, submitted):
        code = service.issue(user)
        with pytest.raises(OTPMismatchError):
            service.verify(user, submitted)
        assert user.otp == code

    def test_naive_expiry_is_treated_as_utc(self, service, user, clock):
        code = service.issue(user)
        user.otp_expiry = user.otp_expiry.replace(tzinfo=None)
        service.verify(user, code)
        assert user.otp is None
