"""checklog package public API."""
from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("checklog")
except Exception:  # fallback when not installed
    __version__ = "0.1.0"

from .history.locator import ArtifactLocator  # re-export
from .history.writer import ArtifactWriter  # re-export
from .history.models import Artifact, CheckRecord, StatusPoint, Repo  # re-export
from .history.github.rest_client import GitHubActionsClient  # re-export

__all__ = ["__version__", "ArtifactLocator", "ArtifactWriter", "Artifact", "CheckRecord", "StatusPoint", "Repo", "GitHubActionsClient"]
