"""Convert delimited playlist exports into broadcast report workbooks."""

from importlib import import_module, metadata
from pathlib import Path
from typing import TYPE_CHECKING
import tomllib

if TYPE_CHECKING:
    from playlist_report.application.engine import Engine
    from playlist_report.application.pipeline.pipeline import ConversionResult, Pipeline, convert_text
    from playlist_report.infrastructure.settings import Settings
    from playlist_report.models.errors import EmptyInputError, InputError, PipelineError, ReportError
    from playlist_report.models.run import RunRequest, RunResult, RunStatus


def _version() -> str:
    # A source checkout reports the version it is at, not a stale installed one.
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        with pyproject.open("rb") as fh:
            return tomllib.load(fh)["project"]["version"]
    try:
        return metadata.version("playlist-report")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "0+unknown"


__version__ = _version()

_LAZY = {
    "playlist_report.application.engine": ("Engine",),
    "playlist_report.application.pipeline.pipeline": ("ConversionResult", "Pipeline", "convert_text"),
    "playlist_report.infrastructure.settings": ("Settings",),
    "playlist_report.models.errors": ("EmptyInputError", "InputError", "PipelineError", "ReportError"),
    "playlist_report.models.run": ("RunRequest", "RunResult", "RunStatus"),
}
_HOME = {name: module for module, names in _LAZY.items() for name in names}


def __getattr__(name: str):
    if name not in _HOME:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(import_module(_HOME[name]), name)
    globals()[name] = value
    return value


__all__ = sorted(_HOME) + ["__version__"]
