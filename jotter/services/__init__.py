"""
Jotter Backend — Services Layer
=================================

Service Inventory:
    - AuthService: signup, verification, OTP login, resend, Google sign-in
    - NoteService: owner-scoped note CRUD
    - OTPService: issue and check 6-digit one-time codes
    - TokenService: sign and verify JWT session tokens
    - Mailer (abstract) / SMTPMailer: deliver OTP emails
    - IdentityVerifier (abstract) / GoogleIdentityVerifier: check Google ID tokens

Services never touch HTTP objects. They raise JotterError subclasses, which
main.py turns into the {status: "ERROR", message} envelope.
"""
