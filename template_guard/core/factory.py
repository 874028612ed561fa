"""Component Factory for analyzer and service instantiation.

Builds the consistency analyzer from configured rule tables so routes,
scripts and tests share one construction path.
"""

import logging

from template_guard.core.config import Settings, get_settings
from template_guard.interfaces.repository import BaseContentRepository
from template_guard.strategies.consistency import ConsistencyAnalyzer, ConsistencyService

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating consistency components based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())
        service = factory.get_service(SqlContentRepository(session))
        report = await service.preview_template_change(1, new_body)
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._analyzer_cache: ConsistencyAnalyzer | None = None

    def get_analyzer(self) -> ConsistencyAnalyzer:
        """Get the analyzer configured with the settings' rule tables.

        The analyzer is stateless, so one instance is shared.
        """
        if self._analyzer_cache is None:
            rules = self._settings.consistency_rules()
            logger.info(
                f"Instantiating consistency analyzer: aliases={len(rules.aliases)}, "
                f"standard_parameters={len(rules.standard_parameters)}, "
                f"high_severity_threshold={self._settings.high_severity_threshold}"
            )
            self._analyzer_cache = ConsistencyAnalyzer(
                rules=rules,
                high_severity_threshold=self._settings.high_severity_threshold,
            )
        return self._analyzer_cache

    def get_service(self, repository: BaseContentRepository) -> ConsistencyService:
        """Get a service bound to a repository.

        Args:
            repository: Request-scoped source of templates and records.

        Returns:
            A ConsistencyService sharing the cached analyzer.
        """
        return ConsistencyService(repository, self.get_analyzer())
