"""Loading of providers documents.

A providers document is a JSON (or YAML) object with a ``version`` string and
a ``providers`` mapping of provider key to provider record. The :class:`Loader`
reads and validates such documents, remembers the version of the last one it
loaded and computes SHA-256 checksums of document files, caching them per
path for the lifetime of the loader instance.
"""

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import semver
import yaml

from .config_paths import get_bundled_providers_path
from .errors import DataFileNotFoundError, MalformedSourceError
from .logging import LogEvent, get_logger, log_debug, log_info

logger = get_logger(__name__)

PathLike = Union[str, Path]

YAML_SUFFIXES = (".yaml", ".yml")


def normalize_version(version: str) -> str:
    """Normalize a data version to full semver form (``"1.2"`` -> ``"1.2.0"``).

    Raises:
        ValueError: If the version cannot be normalized
    """
    version_str = str(version).strip()
    try:
        semver.Version.parse(version_str)
        return version_str
    except ValueError:
        pass

    parts = version_str.split(".")
    if len(parts) == 2:
        candidate = f"{parts[0]}.{parts[1]}.0"
    elif len(parts) == 1:
        candidate = f"{parts[0]}.0.0"
    else:
        raise ValueError(f"Cannot normalize version: {version_str}")

    try:
        semver.Version.parse(candidate)
    except ValueError as e:
        raise ValueError(f"Invalid data version format: {version_str}") from e
    return candidate


class Loader:
    """Reads providers documents and computes their checksums."""

    def __init__(self, default_path: Optional[PathLike] = None) -> None:
        """Initialize the loader.

        Args:
            default_path: Document used when no path is passed to
                :meth:`load` or :meth:`get_checksum`. Defaults to the bundled
                providers document.
        """
        self._default_path = Path(default_path) if default_path else get_bundled_providers_path()
        self._checksums: Dict[Path, str] = {}
        self.version: Optional[str] = None
        self.path: Optional[Path] = None

    def resolve_path(self, path: Optional[PathLike] = None) -> Path:
        """Resolve a document path and check that it exists.

        Raises:
            DataFileNotFoundError: If the file does not exist
        """
        resolved = Path(path) if path else self._default_path
        if not resolved.is_file():
            raise DataFileNotFoundError(f"The providers file '{resolved}' does not exist", path=str(resolved))
        return resolved

    def load_document(self, path: Optional[PathLike] = None) -> Dict[str, Any]:
        """Load and validate a whole providers document.

        Args:
            path: Document path; the default document is used when omitted

        Returns:
            Parsed document with ``version`` and ``providers`` keys

        Raises:
            DataFileNotFoundError: If the file does not exist
            MalformedSourceError: If the file cannot be parsed or lacks
                ``providers`` or ``version``
        """
        resolved = self.resolve_path(path)
        try:
            content = resolved.read_text(encoding="utf-8")
        except OSError as e:
            raise MalformedSourceError(f"Could not read providers file '{resolved}': {e}", path=str(resolved)) from e

        document = self.parse(content, path=resolved)

        self.version = str(document["version"])
        self.path = resolved
        log_info(
            LogEvent.DATA_LOAD,
            "Loaded providers document",
            path=str(resolved),
            version=self.version,
            providers=len(document["providers"]),
        )
        return document

    def load(self, path: Optional[PathLike] = None) -> Dict[str, Any]:
        """Load a providers document and return its provider table."""
        return dict(self.load_document(path)["providers"])

    @staticmethod
    def parse(content: str, path: Optional[PathLike] = None) -> Dict[str, Any]:
        """Parse and validate the text of a providers document.

        YAML is used for ``.yaml``/``.yml`` paths, JSON otherwise.

        Raises:
            MalformedSourceError: If the text is not a valid providers document
        """
        path_str = str(path) if path is not None else None
        try:
            if path is not None and Path(path).suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise MalformedSourceError(f"Invalid providers document format: {e}", path=path_str) from e

        if not isinstance(data, dict):
            raise MalformedSourceError(
                f"Invalid providers document: expected an object, got {type(data).__name__}",
                path=path_str,
            )

        providers = data.get("providers")
        if not providers or not isinstance(providers, dict):
            raise MalformedSourceError(
                "The providers document either does not contain the 'providers' key, "
                "or it is not an object, or it is empty",
                path=path_str,
            )

        if not data.get("version"):
            raise MalformedSourceError(
                "The providers document does not contain a 'version' key",
                path=path_str,
                expected_type="str",
            )

        return data

    def is_version_newer(self, other_version: str) -> bool:
        """Check whether the last loaded document is newer than ``other_version``.

        Raises:
            RuntimeError: If no document has been loaded yet
            ValueError: If either version is not a valid version string
        """
        if self.version is None:
            raise RuntimeError("No providers document loaded. Please load a document first.")

        loaded = semver.Version.parse(normalize_version(self.version))
        other = semver.Version.parse(normalize_version(other_version))
        return loaded > other

    def get_checksum(self, path: Optional[PathLike] = None) -> str:
        """Calculate the SHA-256 checksum of a document file.

        Raises:
            DataFileNotFoundError: If the file does not exist
        """
        resolved = self.resolve_path(path)
        cached = self._checksums.get(resolved)
        if cached is not None:
            return cached

        hasher = hashlib.sha256()
        with open(resolved, "rb") as f:
            for chunk in iter(lambda: f.read(4096), b""):
                hasher.update(chunk)

        checksum = hasher.hexdigest()
        self._checksums[resolved] = checksum
        log_debug(LogEvent.DATA_LOAD, "Computed checksum", path=str(resolved), checksum=checksum)
        return checksum

    def verify_checksum(self, expected: str, path: Optional[PathLike] = None) -> bool:
        """Compare a document's checksum against an expected hex digest."""
        actual = self.get_checksum(path)
        if actual != expected.strip().lower():
            logger.error(f"Checksum mismatch for {self.resolve_path(path)}: expected {expected}, got {actual}")
            return False
        return True
