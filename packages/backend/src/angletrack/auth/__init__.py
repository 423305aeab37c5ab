"""Authentication.

Learn: Users sign up with email/password, log in to get a short-lived
JWT, and send it back as `Authorization: Bearer <token>`. The gate
turns that header into an Identity for every protected route.
"""
