"""
Manifest aggregation — collect npm requirements across the dependency tree.

Layout walked (namespaced packages, two levels deep):

    <vendor_dir>/<namespace>/<package>/<manifest>
    <vendor_dir>/../<manifest>            ← project root, merged last

Every manifest may declare ``extra.<key>`` (default ``npm``) as an
object ``{"name": "version"}`` or an array of bare names and
``{"name": "version"}`` objects.  Third-party manifests are untrusted:
a missing, unreadable or malformed one contributes nothing.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "composer.json"
DEFAULT_KEY = "npm"
ANY_VERSION = "*"


def normalise_section(raw: Any, default: str = ANY_VERSION) -> dict[str, str]:
    """Turn a raw ``extra.<key>`` value into an ordered name → value mapping.

    Bare names get ``default`` as their value.  Entries that are neither
    strings nor single-level objects are dropped.
    """
    result: dict[str, str] = {}

    if isinstance(raw, str):
        raw = [raw]

    if isinstance(raw, dict):
        for name, value in raw.items():
            if not isinstance(name, str) or not name:
                continue
            result[name] = default if value is None else str(value)
        return result

    if isinstance(raw, list):
        for entry in raw:
            if isinstance(entry, str) and entry:
                result[entry] = default
            elif isinstance(entry, dict):
                result.update(normalise_section(entry, default))
        return result

    if raw is not None:
        logger.debug("Ignoring unsupported section of type %s", type(raw).__name__)
    return result


def read_manifest(directory: Path, manifest_name: str = DEFAULT_MANIFEST) -> dict[str, Any] | None:
    """Read and decode one manifest, or None if absent or malformed."""
    path = directory / manifest_name
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Skipping unreadable manifest %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Skipping manifest %s: top level is %s", path, type(data).__name__)
        return None
    return data


def read_manifest_section(
    directory: Path,
    key: str = DEFAULT_KEY,
    manifest_name: str = DEFAULT_MANIFEST,
    default: str = ANY_VERSION,
) -> dict[str, str]:
    """Return the normalised ``extra.<key>`` section of a directory's manifest."""
    data = read_manifest(directory, manifest_name)
    if data is None:
        return {}

    extra = data.get("extra")
    if not isinstance(extra, dict) or key not in extra:
        return {}
    return normalise_section(extra[key], default)


def iter_dependency_dirs(vendor_dir: Path):
    """Yield ``<vendor_dir>/<namespace>/<package>`` directories in sorted order."""
    if not vendor_dir.is_dir():
        logger.debug("Dependency directory %s does not exist", vendor_dir)
        return

    for namespace in _sorted_subdirs(vendor_dir):
        yield from _sorted_subdirs(namespace)


def _sorted_subdirs(directory: Path) -> list[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return []
    return [e for e in entries if e.is_dir()]


def collect_requirements(
    vendor_dir: Path,
    key: str | None = None,
    manifest_name: str = DEFAULT_MANIFEST,
    default: str = ANY_VERSION,
) -> dict[str, str]:
    """Merge ``extra.<key>`` from every dependency manifest plus the project root.

    Later manifests overwrite earlier ones on duplicate names; the project
    root is merged last, so it can re-pin but never remove a dependency's
    declaration.

    Args:
        vendor_dir: The host package manager's install directory.
        key: Section name under ``extra`` (default ``npm``).
        manifest_name: Manifest file name in each package directory.
        default: Value given to bare (unversioned) entries.

    Returns:
        Ordered mapping of package name → version constraint.
    """
    key = key or DEFAULT_KEY
    vendor_dir = Path(vendor_dir)
    merged: dict[str, str] = {}

    for directory in iter_dependency_dirs(vendor_dir):
        section = read_manifest_section(directory, key, manifest_name, default)
        if section:
            logger.debug("%s declares %d '%s' entries", directory, len(section), key)
            merged.update(section)

    merged.update(read_manifest_section(vendor_dir.parent, key, manifest_name, default))

    logger.info("Collected %d '%s' entries under %s", len(merged), key, vendor_dir)
    return merged


def collect_confirmations(
    vendor_dir: Path,
    root_extra: dict[str, Any] | None = None,
    key: str = f"{DEFAULT_KEY}-confirm",
    manifest_name: str = DEFAULT_MANIFEST,
) -> dict[str, str]:
    """Merge the packages that need confirmation, with their justification.

    The host's own ``extra`` block (``root_extra``) is merged on top, so a
    root package configured outside its manifest can still ask.
    """
    confirmations = collect_requirements(vendor_dir, key, manifest_name, default="")
    if root_extra and key in root_extra:
        confirmations.update(normalise_section(root_extra[key], default=""))
    return confirmations
