from fastapi import APIRouter

from certverify.modules.contact_messages import router as contact_messages_router
from certverify.modules.contact_messages.admin_router import router as admin_contact_router
from certverify.modules.graduation_years.admin_router import router as admin_years_router
from certverify.modules.settings.admin_router import router as admin_settings_router
from certverify.modules.students.admin_router import router as admin_students_router
from certverify.modules.verification import router as verification_router

api_router = APIRouter()

api_router.include_router(verification_router, prefix="/verify", tags=["Verification"])

api_router.include_router(
    contact_messages_router, prefix="/contact-messages", tags=["Contact"]
)

api_router.include_router(
    admin_students_router,
    prefix="/admin/students",
    tags=["Admin - Students"],
)

api_router.include_router(
    admin_years_router,
    prefix="/admin/graduation-years",
    tags=["Admin - Graduation Years"],
)

api_router.include_router(
    admin_contact_router,
    prefix="/admin/contact-messages",
    tags=["Admin - Contact Messages"],
)

api_router.include_router(
    admin_settings_router,
    prefix="/admin/settings",
    tags=["Admin - Settings"],
)
