import os
from dataclasses import dataclass, field

import numpy as np

from matmul_errors import InvalidConfiguration

DEFAULT_CHUNK_SIZE = 16
DEFAULT_BACKEND = "process"
BACKENDS = ("process", "thread", "mpi")


def _default_workers():
    return os.cpu_count() or 1


def _int_from_env(name, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidConfiguration(f"{name} must be an integer, got {raw!r}") from e


def _backend_from_env():
    return (os.getenv("MATMUL_BACKEND") or DEFAULT_BACKEND).strip().lower()


def check_positive_int(name, value):
    # bool is an int subclass but never a meaningful size
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be positive, got {value}")
    return int(value)


@dataclass
class ParallelConfig:
    """
    Settings for the parallel multiplication path.

    Attributes:
        chunk_size: side length of the square chunks the output is split into
        workers: size of the worker pool
        backend: which worker pool runs the chunks ("process", "thread" or "mpi")
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    workers: int = field(default_factory=_default_workers)
    backend: str = DEFAULT_BACKEND

    @classmethod
    def from_env(cls, chunk_size=None, workers=None, backend=None) -> "ParallelConfig":
        """
        Build a validated config, reading MATMUL_* only for arguments left as None.

        An explicit argument is used as is, so a malformed variable for that
        same setting is never parsed.
        """
        if chunk_size is None:
            chunk_size = _int_from_env("MATMUL_CHUNK_SIZE", DEFAULT_CHUNK_SIZE)
        if workers is None:
            workers = _int_from_env("MATMUL_WORKERS", _default_workers())
        if backend is None:
            backend = _backend_from_env()
        config = cls(chunk_size=chunk_size, workers=workers, backend=backend)
        config.validate()
        return config

    def validate(self):
        self.chunk_size = check_positive_int("chunk_size", self.chunk_size)
        self.workers = check_positive_int("workers", self.workers)
        if self.backend not in BACKENDS:
            raise InvalidConfiguration(f"Unknown backend {self.backend!r}. Expected one of {BACKENDS}")
