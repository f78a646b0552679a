import os

import numpy as np
import pytest

from matmul_config import DEFAULT_CHUNK_SIZE, ParallelConfig
from matmul_errors import InvalidConfiguration


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("MATMUL_CHUNK_SIZE", "MATMUL_WORKERS", "MATMUL_BACKEND"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = ParallelConfig.from_env()
    assert config.chunk_size == DEFAULT_CHUNK_SIZE == 16
    assert config.workers == (os.cpu_count() or 1)
    assert config.backend == "process"


def test_reads_environment(clean_env):
    clean_env.setenv("MATMUL_CHUNK_SIZE", "32")
    clean_env.setenv("MATMUL_WORKERS", "2")
    clean_env.setenv("MATMUL_BACKEND", " MPI ")
    assert ParallelConfig.from_env() == ParallelConfig(chunk_size=32, workers=2, backend="mpi")


def test_blank_values_fall_back_to_defaults(clean_env):
    clean_env.setenv("MATMUL_CHUNK_SIZE", "  ")
    assert ParallelConfig.from_env().chunk_size == DEFAULT_CHUNK_SIZE


@pytest.mark.parametrize("name,value", [
    ("MATMUL_CHUNK_SIZE", "sixteen"),
    ("MATMUL_CHUNK_SIZE", "0"),
    ("MATMUL_WORKERS", "-2"),
    ("MATMUL_BACKEND", "cuda"),
])
def test_bad_environment_values(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(InvalidConfiguration):
        ParallelConfig.from_env()


def test_configuration_errors_are_value_errors():
    with pytest.raises(ValueError):
        ParallelConfig(chunk_size=-1).validate()


def test_explicit_values_skip_bad_environment(clean_env):
    clean_env.setenv("MATMUL_CHUNK_SIZE", "sixteen")
    clean_env.setenv("MATMUL_WORKERS", "-1")
    clean_env.setenv("MATMUL_BACKEND", "cuda")
    config = ParallelConfig.from_env(chunk_size=8, workers=2, backend="thread")
    assert config == ParallelConfig(chunk_size=8, workers=2, backend="thread")


def test_only_missing_settings_are_read(clean_env):
    clean_env.setenv("MATMUL_CHUNK_SIZE", "sixteen")
    clean_env.setenv("MATMUL_WORKERS", "3")
    assert ParallelConfig.from_env(chunk_size=4).workers == 3


def test_numpy_integers_are_accepted():
    config = ParallelConfig(chunk_size=np.int64(4), workers=np.int32(2))
    config.validate()
    assert config.chunk_size == 4 and type(config.chunk_size) is int
    assert config.workers == 2 and type(config.workers) is int
