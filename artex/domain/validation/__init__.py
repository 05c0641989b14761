from .path_validator import PathValidationError, PathValidator, normalize_artifact_path

__all__ = ["PathValidationError", "PathValidator", "normalize_artifact_path"]
