"""Profile assembly from fetched documents."""

from .service import ProfileLookup, ProfileService, assemble_record, extract_profile

__all__ = ["ProfileLookup", "ProfileService", "assemble_record", "extract_profile"]
