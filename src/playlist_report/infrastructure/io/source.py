"""Source text IO for :class:`~playlist_report.application.engine.Engine`."""

from __future__ import annotations

from pathlib import Path

from playlist_report.models.errors import InputError


def decode_source(data: bytes, *, encoding: str = "utf-8-sig") -> str:
    """Decode uploaded bytes into text, raising :class:`InputError` on bad input."""

    try:
        return data.decode(encoding)
    except LookupError as exc:
        raise InputError(f"Unknown input encoding: {encoding}") from exc
    except UnicodeDecodeError as exc:
        raise InputError(
            f"Input is not valid {encoding} text (byte offset {exc.start})"
        ) from exc


def read_source_text(path: Path, *, encoding: str = "utf-8-sig") -> str:
    """Read a delimited text file from disk."""

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InputError(f"Failed to read input file '{path.name}': {exc}") from exc
    return decode_source(data, encoding=encoding)


def write_output(path: Path, content: bytes) -> None:
    """Write ``content`` next to ``path`` then move it into place."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_bytes(content)
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


__all__ = ["decode_source", "read_source_text", "write_output"]
