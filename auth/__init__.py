"""
auth — PlanP account module.

Provides:
  • bcrypt password hashing & strength scoring
  • Signup input validation
  • ``UserRepository`` / ``UserService`` (signup, login, Google login)
  • JWT access / refresh tokens
  • ``get_current_user`` FastAPI dependency
"""
