"""Scratch-space handling for downloaded artifact archives."""
from __future__ import annotations
from pathlib import Path
import io
import shutil
import zipfile

from .errors import ArtifactExtractError


def save_and_extract(payload: bytes, archive_path: Path, target_dir: Path) -> Path:
    """Write `payload` to `archive_path` and unpack it into `target_dir`.

    `target_dir` is emptied first so it only ever holds this archive's files.
    Returns `target_dir`.
    """
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        archive_path.write_bytes(payload)
        if target_dir.exists():
            shutil.rmtree(target_dir)
        target_dir.mkdir(parents=True)
        # zipfile strips absolute paths and '..' members on extract
        with zipfile.ZipFile(io.BytesIO(payload)) as zf:
            zf.extractall(target_dir)
    except zipfile.BadZipFile as e:
        raise ArtifactExtractError(f"Artifact archive {archive_path.name} is not a valid zip: {e}") from e
    except OSError as e:
        raise ArtifactExtractError(f"Could not unpack {archive_path.name} into {target_dir}: {e}") from e
    return target_dir
