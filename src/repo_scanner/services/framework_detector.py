"""Framework detection from ``package.json`` dependency maps."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from repo_scanner.domain.classification import FRAMEWORK_INDICATORS, Framework

logger = logging.getLogger(__name__)


def _dependency_map(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def detect(
    manifest_text: str,
    target: set[Framework],
    indicators: Mapping[Framework, tuple[str, ...]] = FRAMEWORK_INDICATORS,
) -> None:
    """Add every framework whose indicator dependency appears in the manifest.

    Best-effort: a manifest that is not a JSON object contributes nothing and
    raises nothing.  Only dependency presence matters, never the version.
    """
    try:
        manifest = json.loads(manifest_text)
    except (ValueError, RecursionError):
        logger.debug("Manifest is not valid JSON, skipping framework detection")
        return
    if not isinstance(manifest, dict):
        return

    deps = {
        **_dependency_map(manifest.get("dependencies")),
        **_dependency_map(manifest.get("devDependencies")),
    }

    for framework, names in indicators.items():
        if any(name in deps for name in names):
            target.add(framework)
