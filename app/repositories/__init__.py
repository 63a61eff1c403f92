"""Data-access modules for the credential store (users, roles, photos)."""
