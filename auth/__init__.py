"""
auth — User authentication module.

Provides:
  • JWT token creation & verification
  • Password hashing (bcrypt, per-call salt)
  • Signup / Login / Verify API routes
  • ``require_auth`` FastAPI dependency
"""
