"""Write generated project trees to disk or into a zip archive."""

from __future__ import annotations

import io
import shutil
import zipfile
from pathlib import Path, PurePosixPath
from typing import Mapping, Union

from ..errors import ProjectWriteError
from ..observability.logging import get_logger, log_event

logger = get_logger(__name__)

ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
ZIP_FILE_MODE = 0o644


def _checked_relative_path(path: str) -> PurePosixPath:
    relative = PurePosixPath(path)
    if not path or relative.is_absolute() or ".." in relative.parts:
        raise ProjectWriteError(f"Refusing to write outside the project root: {path!r}")
    return relative


class ProjectWriter:
    """Materializes a ``Dict[str, str]`` project tree."""

    def write_directory(self, files: Mapping[str, str], out_dir: Union[str, Path]) -> Path:
        """
        Write every file below ``out_dir``.

        Raises:
            ProjectWriteError: if ``out_dir`` exists and is not empty, or any
                write fails (partial output is removed)
        """
        output_path = Path(out_dir).resolve()
        if output_path.exists():
            if not output_path.is_dir():
                raise ProjectWriteError(f"Output path is not a directory: {output_path}")
            if any(output_path.iterdir()):
                raise ProjectWriteError(
                    f"Output directory not empty: {output_path}",
                    hint="Choose a new directory or remove the existing one",
                )
        relative_paths = {path: _checked_relative_path(path) for path in files}
        output_path.mkdir(parents=True, exist_ok=True)

        try:
            for path in sorted(files):
                target = output_path.joinpath(*relative_paths[path].parts)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(files[path], encoding="utf-8", newline="\n")
        except OSError as exc:
            shutil.rmtree(output_path, ignore_errors=True)
            raise ProjectWriteError(f"Failed to write project to {output_path}: {exc}") from exc

        log_event(
            "project.written",
            f"Wrote {len(files)} file(s) to {output_path}",
            logger=logger,
            destination=str(output_path),
            file_count=len(files),
        )
        return output_path

    def write_zip(self, files: Mapping[str, str]) -> bytes:
        """Deterministic zip bytes: sorted entries, fixed timestamps and permissions."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path in sorted(files):
                info = zipfile.ZipInfo(str(_checked_relative_path(path)), date_time=ZIP_TIMESTAMP)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = ZIP_FILE_MODE << 16
                archive.writestr(info, files[path].encode("utf-8"))
        return buffer.getvalue()
