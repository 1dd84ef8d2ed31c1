"""YAML/dict config loader for bundle-redactor.

Supports loading from a YAML file or a plain dict (for embedding
in a larger tool config).

Example YAML:

    bundle_redactor:
      obfuscate:
        - type: ip
          replacement_type: consistent   # "static" or "consistent"
          target: all                    # "contents", "path" or "all"
        - type: mac
          target: contents
        - type: domain
          domains:
            - example.com
        - type: keyword
          replacements:
            prod-cluster: cluster-a
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

import yaml

from .chain import ObfuscatorChain
from .errors import ConfigurationError
from .obfuscator import (
    Obfuscator,
    create_domain_obfuscator,
    create_ip_obfuscator,
    create_keyword_obfuscator,
    create_mac_obfuscator,
)
from .types import ReplacementType, Target

logger = logging.getLogger(__name__)

OBFUSCATOR_TYPES = ("ip", "mac", "domain", "keyword")

_DEFAULT_OBFUSCATE = [{"type": "ip"}]


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize and validate a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "bundle_redactor" key or flat
    if isinstance(data, dict) and "bundle_redactor" in data:
        data = data["bundle_redactor"] or {}
    if not isinstance(data, dict):
        raise ConfigurationError("config must be a mapping")

    entries = data.get("obfuscate") or _DEFAULT_OBFUSCATE
    if not isinstance(entries, list):
        raise ConfigurationError("'obfuscate' must be a list")

    return {"obfuscate": [_normalize_entry(e) for e in entries]}


def _normalize_entry(entry: Any) -> dict[str, Any]:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"obfuscator entry must be a mapping, got {entry!r}")

    otype = str(entry.get("type", "")).strip().lower()
    if otype not in OBFUSCATOR_TYPES:
        raise ConfigurationError(
            f"unknown obfuscator type {entry.get('type')!r}, "
            f"expected one of: {', '.join(OBFUSCATOR_TYPES)}"
        )

    out: dict[str, Any] = {
        "type": otype,
        "replacement_type": ReplacementType.parse(entry.get("replacement_type", "static")),
        "target": Target.parse(entry.get("target", "all")),
    }
    if otype == "domain":
        domains = entry.get("domains") or []
        if not domains:
            raise ConfigurationError("domain obfuscator needs a non-empty 'domains' list")
        out["domains"] = [str(d) for d in domains]
    elif otype == "keyword":
        replacements = entry.get("replacements") or {}
        if isinstance(replacements, list):
            replacements = {k: "" for k in replacements}
        if not replacements:
            raise ConfigurationError("keyword obfuscator needs a non-empty 'replacements' mapping")
        out["replacements"] = {str(k): str(v or "") for k, v in replacements.items()}
    return out


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in {path}: {e}") from e
    return load_config(data)


def create_obfuscator(entry: dict[str, Any]) -> Obfuscator:
    """Create one obfuscator from a normalized config entry."""
    rtype = entry["replacement_type"]
    target = entry["target"]
    otype = entry["type"]
    if otype == "ip":
        obfuscator = create_ip_obfuscator(rtype, target=target)
    elif otype == "mac":
        obfuscator = create_mac_obfuscator(rtype, target=target)
    elif otype == "domain":
        obfuscator = create_domain_obfuscator(entry["domains"], rtype, target=target)
    else:
        obfuscator = create_keyword_obfuscator(entry["replacements"], rtype, target=target)
    logger.info(
        "configured %s obfuscator (replacement=%s, target=%s)",
        otype, obfuscator.replacement_type.value, obfuscator.target.value,
    )
    return obfuscator


def create_chain(config: dict[str, Any]) -> ObfuscatorChain:
    """Create a fully configured chain from a config dict."""
    cfg = config if _is_normalized(config) else load_config(config)
    return ObfuscatorChain(obfuscators=[create_obfuscator(e) for e in cfg["obfuscate"]])


def _is_normalized(config: dict[str, Any]) -> bool:
    entries = config.get("obfuscate")
    return bool(entries) and isinstance(entries, list) and all(
        isinstance(e, dict) and isinstance(e.get("target"), Target) for e in entries
    )
