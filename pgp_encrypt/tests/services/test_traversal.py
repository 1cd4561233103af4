import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from pgp_encrypt.config import EncryptConfig, OutputMode, OutputNaming
from pgp_encrypt.exceptions import FileIOError, InvalidInputError
from pgp_encrypt.services.traversal import is_encrypted, output_path, plan_tasks, walk_files


def _mirror_config(input_dir: Path, output_dir: Path, **kwargs: object) -> EncryptConfig:
    return EncryptConfig(
        input_dir=input_dir, key_file=Path("k.asc"), output_dir=output_dir, **kwargs
    )


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("report.pgp", True),
        ("archive.tar.pgp", True),
        ("report.PGP", False),
        ("report.txt", False),
        ("pgp", False),
        (".pgp", False),
    ],
)
def test_is_encrypted_matches_suffix_case_sensitively(name: str, expected: bool) -> None:
    assert is_encrypted(Path(name), ".pgp") is expected


def test_walk_files_lists_nested_files_sorted(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"b.txt": b"b", "a/z.txt": b"z", "a/y/x.txt": b"x", "c.bin": b"c"})

    files = walk_files(root)

    assert [f.relative_to(root).as_posix() for f in files] == [
        "a/y/x.txt",
        "a/z.txt",
        "b.txt",
        "c.bin",
    ]


def test_walk_files_returns_nothing_for_empty_directory(tmp_path: Path) -> None:
    assert walk_files(tmp_path) == []


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_walk_files_ignores_symlinks(make_tree: Callable[..., Path], tmp_path: Path) -> None:
    root = make_tree({"real.txt": b"data"})
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_bytes(b"s")
    (root / "link.txt").symlink_to(root / "real.txt")
    (root / "linked_dir").symlink_to(outside, target_is_directory=True)

    files = walk_files(root)

    assert files == [root / "real.txt"]


def test_walk_files_raises_io_error_when_directory_unreadable(tmp_path: Path) -> None:
    error = PermissionError(13, "Permission denied", str(tmp_path / "locked"))

    def _walk(top: Path, onerror: Callable[[OSError], None]) -> list:
        onerror(error)
        return []

    with patch("pgp_encrypt.services.traversal.os.walk", side_effect=_walk):
        with pytest.raises(FileIOError, match="Failed to read directory") as exc_info:
            walk_files(tmp_path)

    assert exc_info.value.__cause__ is error


def test_output_path_replaces_extension_by_default(tmp_path: Path) -> None:
    config = _mirror_config(tmp_path / "in", tmp_path / "out")
    source = tmp_path / "in" / "docs" / "report.txt"

    result = output_path(config, source, Path("docs/report.txt"))

    assert result == tmp_path / "out" / "docs" / "report.pgp"


def test_output_path_appends_suffix_to_extensionless_file(tmp_path: Path) -> None:
    config = _mirror_config(tmp_path / "in", tmp_path / "out")

    result = output_path(config, tmp_path / "in" / "README", Path("README"))

    assert result == tmp_path / "out" / "README.pgp"


def test_output_path_keeps_extension_when_appending(tmp_path: Path) -> None:
    config = _mirror_config(tmp_path / "in", tmp_path / "out", naming=OutputNaming.APPEND)

    result = output_path(config, tmp_path / "in" / "report.txt", Path("report.txt"))

    assert result == tmp_path / "out" / "report.txt.pgp"


def test_output_path_is_source_in_place(tmp_path: Path) -> None:
    config = EncryptConfig(
        input_dir=tmp_path, key_file=Path("k.asc"), mode=OutputMode.IN_PLACE
    )
    source = tmp_path / "report.txt"

    assert output_path(config, source, Path("report.txt")) == source


def test_plan_tasks_skips_encrypted_files(make_tree: Callable[..., Path], tmp_path: Path) -> None:
    root = make_tree({"a.txt": b"a", "b.pgp": b"b", "sub/c.md": b"c", "sub/d.pgp": b"d"})
    config = _mirror_config(root, tmp_path / "out")

    tasks, skipped = plan_tasks(config)

    assert skipped == 2
    assert [t.relative.as_posix() for t in tasks] == ["a.txt", "sub/c.md"]
    assert tasks[1].destination == tmp_path / "out" / "sub" / "c.pgp"
    assert not tasks[0].in_place


def test_plan_tasks_in_place_targets_sources(make_tree: Callable[..., Path]) -> None:
    root = make_tree({"a.txt": b"a"})
    config = EncryptConfig(input_dir=root, key_file=Path("k.asc"), mode=OutputMode.IN_PLACE)

    tasks, skipped = plan_tasks(config)

    assert skipped == 0
    assert len(tasks) == 1
    assert tasks[0].in_place


def test_plan_tasks_rejects_sources_sharing_an_output(
    make_tree: Callable[..., Path], tmp_path: Path
) -> None:
    root = make_tree({"a.txt": b"a", "a.md": b"b"})
    config = _mirror_config(root, tmp_path / "out")

    with pytest.raises(InvalidInputError, match="--keep-extension") as exc_info:
        plan_tasks(config)

    assert exc_info.value.path == tmp_path / "out" / "a.pgp"
    assert exc_info.value.exit_code == 1


def test_plan_tasks_allows_same_stem_when_keeping_extension(
    make_tree: Callable[..., Path], tmp_path: Path
) -> None:
    root = make_tree({"a.txt": b"a", "a.md": b"b"})
    config = EncryptConfig(
        input_dir=root,
        key_file=Path("k.asc"),
        output_dir=tmp_path / "out",
        naming=OutputNaming.APPEND,
    )

    tasks, _ = plan_tasks(config)

    assert sorted(t.destination.name for t in tasks) == ["a.md.pgp", "a.txt.pgp"]
