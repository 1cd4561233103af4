from collections.abc import Callable, Iterator
from pathlib import Path

import pgpy
import pytest
import structlog

from pgp_encrypt.tests.utils.keys import create_test_key


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def encryption_key() -> pgpy.PGPKey:
    return create_test_key()


@pytest.fixture(scope="session")
def signing_only_key() -> pgpy.PGPKey:
    return create_test_key(encryption_subkeys=0)


@pytest.fixture
def public_key_file(tmp_path: Path, encryption_key: pgpy.PGPKey) -> Path:
    path = tmp_path / "recipient.asc"
    path.write_text(str(encryption_key.pubkey))
    return path


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    def _make(files: dict[str, bytes], root: str = "input") -> Path:
        base = tmp_path / root
        base.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        return base

    return _make
