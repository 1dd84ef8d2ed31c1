"""bundle-redactor — consistent redaction of network identities in diagnostic bundles."""

from .chain import ObfuscatorChain
from .config import create_chain, load_config, load_from_yaml
from .errors import ConfigurationError, RedactorError
from .obfuscator import (
    Obfuscator,
    create_domain_obfuscator,
    create_ip_obfuscator,
    create_keyword_obfuscator,
    create_mac_obfuscator,
)
from .policy import ConsistentPolicy, StaticPolicy, create_policy
from .report import Report, dump_report
from .tracker import ConsistentTracker
from .types import Match, ReplacementType, Target

__all__ = [
    "Obfuscator", "ObfuscatorChain",
    "create_ip_obfuscator", "create_mac_obfuscator",
    "create_domain_obfuscator", "create_keyword_obfuscator",
    "ConsistentPolicy", "StaticPolicy", "create_policy",
    "ConsistentTracker", "Report", "dump_report",
    "create_chain", "load_config", "load_from_yaml",
    "ConfigurationError", "RedactorError",
    "Match", "ReplacementType", "Target",
]
__version__ = "0.1.0"
