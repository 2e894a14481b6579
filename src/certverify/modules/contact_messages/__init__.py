"""
Contact Messages Module

Public contact form and the admin inbox.

API Endpoints:
- POST /contact-messages - Send a message (rate limited per IP)
- GET /admin/contact-messages - List messages
- GET /admin/contact-messages/{id} - Read a message
- POST /admin/contact-messages/{id}/respond - Respond to a message
"""

from .router import router

__all__ = ["router"]
