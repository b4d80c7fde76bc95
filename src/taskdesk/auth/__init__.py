"""
Account subsystem.

Components:
- auth_models.py: AuthOutcome / AuthResult
- passwords.py: SHA-256 digest + bcrypt hashing and verification
- auth_store.py: SQLite-backed register/login
"""
