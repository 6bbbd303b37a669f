"""Authentication and authorization.

Three pieces:
1. TokenService → issues and verifies signed, expiring bearer tokens
2. get_current_user → the gate in front of every protected route
3. ensure_owner → the check every update/delete runs before mutating

Passwords are bcrypt-hashed before they reach the database.
"""
