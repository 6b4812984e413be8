# common/errors.py
"""
Error kinds raised by the loaders, the validator and the writer/tracer.
Library code only raises; ecd_sample_prep.main() turns them into exit statuses.
"""

from __future__ import annotations

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_CAPACITY = 3
EXIT_GEOMETRY = 4


class SamplePrepError(Exception):
    exit_code: int = EXIT_FAILURE


class ConfigError(SamplePrepError, ValueError):
    pass


# ---------- I/O boundary ----------
class FileNotFound(SamplePrepError, FileNotFoundError):
    def __init__(self, path):
        super().__init__(f"{path} not found")
        self.path = str(path)


class CannotOpenFile(SamplePrepError, OSError):
    def __init__(self, path):
        super().__init__(f"Can't open {path}")
        self.path = str(path)


class CannotCreateFile(SamplePrepError, OSError):
    def __init__(self, path):
        super().__init__(f"Can't create {path}")
        self.path = str(path)


# ---------- Definition files ----------
class InvalidCellNumber(SamplePrepError, ValueError):
    pass


class UndefinedFragment(SamplePrepError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Undefined fragment name '{self.name}'"


class MalformedInteger(SamplePrepError, ValueError):
    pass


# ---------- Validation ----------
class CapacityExceeded(SamplePrepError):
    """The frame groups implied by the distribution don't fit the contig buffer."""
    exit_code = EXIT_CAPACITY

    def __init__(self, report):
        super().__init__("The specified fragment distribution won't fit into the contiguous buffer!")
        self.report = report


class GeometryMismatch(SamplePrepError):
    exit_code = EXIT_GEOMETRY


class InternalConsistency(SamplePrepError, RuntimeError):
    pass
