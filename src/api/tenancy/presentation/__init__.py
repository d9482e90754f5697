"""Tenancy presentation layer.

HTTP routes the front-end calls at startup to learn which organization the
current host belongs to, and from the registration form to vet subdomains.
"""

from __future__ import annotations

from tenancy.presentation.routes import router

__all__ = ["router"]
