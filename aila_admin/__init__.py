"""
AILA admin backend.

REST API behind the AILA administration dashboard: accounts, the book
catalog, the user/lawyer directory, KYC review and chat conversations
proxied to an external generation service. `aila_admin.main` is the
application entry point.
"""
