"""Service layer: validation and lint operations returning ServiceResult."""
