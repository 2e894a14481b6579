"""
Graduation years module - the years students are grouped by.
"""

from certverify.modules.graduation_years.models import GraduationYear

__all__ = ["GraduationYear"]
