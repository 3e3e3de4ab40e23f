"""Process ring argument handling and a pipeline-splitting prompt."""

__all__ = ["pipeline", "ring"]