"""
Filesystem helpers: archive extraction, content-only copy, executable bit.
"""

import os
import shutil
import stat
import tarfile
import zipfile
from pathlib import Path
from typing import Union

from .errors import ExtractionError
from .platforms import ArchiveKind

PathLike = Union[str, Path]


def _is_within_directory(directory: Path, target: Path) -> bool:
    directory = directory.resolve()
    target = target.resolve()
    return target == directory or directory in target.parents


def _link_stays_inside(directory: Path, member: tarfile.TarInfo) -> bool:
    if member.issym():
        return _is_within_directory(directory, (directory / member.name).parent / member.linkname)
    if member.islnk():
        return _is_within_directory(directory, directory / member.linkname)
    return True


def extract_archive(archive_path: PathLike, dest_dir: PathLike, kind: ArchiveKind) -> Path:
    """
    Extract a tar.gz or zip archive into dest_dir.

    Entries that would land outside dest_dir are refused.

    Raises:
        ExtractionError: Corrupt archive or path-traversal entry.
    """
    archive_path = Path(archive_path)
    dest_dir = Path(dest_dir)
    try:
        if kind == ArchiveKind.GZIP_TAR:
            with tarfile.open(archive_path, "r:gz") as tar:
                for member in tar.getmembers():
                    if not _is_within_directory(dest_dir, dest_dir / member.name):
                        raise ExtractionError(
                            f"Refusing to extract path-traversal entry: {member.name}",
                            details={"archive": str(archive_path), "entry": member.name},
                        )
                    if not _link_stays_inside(dest_dir, member):
                        raise ExtractionError(
                            f"Refusing to extract link pointing outside archive: "
                            f"{member.name} -> {member.linkname}",
                            details={"archive": str(archive_path), "entry": member.name},
                        )
                if hasattr(tarfile, "data_filter"):
                    tar.extractall(dest_dir, filter="data")
                else:
                    tar.extractall(dest_dir)
        elif kind == ArchiveKind.ZIP:
            with zipfile.ZipFile(archive_path, "r") as zip_ref:
                for name in zip_ref.namelist():
                    if not _is_within_directory(dest_dir, dest_dir / name):
                        raise ExtractionError(
                            f"Refusing to extract path-traversal entry: {name}",
                            details={"archive": str(archive_path), "entry": name},
                        )
                zip_ref.extractall(dest_dir)
                _restore_zip_permissions(zip_ref, dest_dir)
        else:
            raise ExtractionError(f"Unknown archive format: {archive_path}")
    except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
        raise ExtractionError(
            f"Failed to extract {archive_path.name}: {e}",
            details={"archive": str(archive_path), "dest": str(dest_dir)},
        ) from e
    return dest_dir


def _restore_zip_permissions(zip_ref: zipfile.ZipFile, dest_dir: Path) -> None:
    # zipfile drops unix mode bits; they live in the high 16 bits of external_attr
    for info in zip_ref.infolist():
        mode = info.external_attr >> 16
        if mode and not info.is_dir():
            os.chmod(dest_dir / info.filename, stat.S_IMODE(mode))


def copy_content_only(src_dir: PathLike, dest_dir: PathLike) -> None:
    """
    Copy the children of src_dir directly into dest_dir.

    Unlike ``shutil.copytree(src, dest / src.name)`` no directory named after
    the source is created. Existing files are overwritten.
    """
    src_dir = Path(src_dir)
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)
    for item in src_dir.iterdir():
        target = dest_dir / item.name
        if item.is_dir() and not item.is_symlink():
            shutil.copytree(item, target, symlinks=True, dirs_exist_ok=True)
        else:
            shutil.copy2(item, target, follow_symlinks=False)


def make_executable(path: PathLike) -> None:
    """Add the executable bit for user, group and others."""
    path = Path(path)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def is_executable(path: PathLike) -> bool:
    path = Path(path)
    return path.is_file() and os.access(path, os.X_OK)
