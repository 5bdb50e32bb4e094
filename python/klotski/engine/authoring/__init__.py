from klotski.engine.authoring.validator import LevelValidator, ValidationReport

__all__ = ["LevelValidator", "ValidationReport"]
