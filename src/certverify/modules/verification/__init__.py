"""
Certificate Verification Module

Public certificate lookup and verification:
1. Search by exact admission number or certificate number
2. Verification view by student id (the link encoded in certificate QR codes)
3. Status presentation (Graduated / Revoked / Pending / Unknown)

API Endpoints:
- GET /verify/search - Find a certificate
- GET /verify/{student_id} - Verification view

The resolver is read-only; student records are managed through the
admin endpoints of the students module.
"""

from .router import router
from .service import VerificationResolver, build_resolver

__all__ = ["router", "VerificationResolver", "build_resolver"]
