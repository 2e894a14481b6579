"""
Students module - student records whose certificates are verified publicly.
"""

from certverify.modules.students.models import Gender, GraduationStatus, Student

__all__ = ["Gender", "GraduationStatus", "Student"]
