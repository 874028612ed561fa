"""Rule tables for cross-template consistency checks.

The alias mapping and the standard-parameter whitelist are plain data so
they can be swapped per deployment (see ``Settings.consistency_rules``).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Content-template name -> URL-template parameter carrying the same value.
DEFAULT_PLACEHOLDER_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "link": "baseUrl",
        "url": "baseUrl",
    }
)

# Populated out-of-band; never reported as unused.
DEFAULT_STANDARD_PARAMETERS: frozenset[str] = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "baseUrl",
        "source",
        "medium",
        "campaign",
        "term",
        "content",
    }
)


@dataclass(frozen=True)
class ConsistencyRules:
    """Alias and standard-parameter tables consumed by the analyzer.

    Attributes:
        aliases: Content-template name to URL-template parameter name.
        standard_parameters: Names exempt from "unused" reporting.
    """

    aliases: Mapping[str, str] = field(default_factory=lambda: DEFAULT_PLACEHOLDER_ALIASES)
    standard_parameters: frozenset[str] = DEFAULT_STANDARD_PARAMETERS

    @classmethod
    def from_tables(
        cls,
        aliases: Mapping[str, str],
        standard_parameters: Iterable[str],
    ) -> "ConsistencyRules":
        """Build frozen rules from plain configuration values."""
        return cls(
            aliases=MappingProxyType(dict(aliases)),
            standard_parameters=frozenset(standard_parameters),
        )

    def alias_of(self, name: str) -> str | None:
        """Return the URL-side parameter a content-side name maps to."""
        return self.aliases.get(name)

    def names_aliased_to(self, parameter: str) -> list[str]:
        """Return every content-side name that maps to a URL-side parameter."""
        return [source for source, target in self.aliases.items() if target == parameter]

    def is_standard(self, name: str) -> bool:
        return name in self.standard_parameters


DEFAULT_RULES = ConsistencyRules()
