"""
Service container for dependency injection.
Centralizes service initialization and provides access to all services.
"""
import os
import logging
from typing import Optional

from taskmind.adapters import CompletionOracle, HTTPCompletionOracle
from taskmind.config import Settings, get_settings
from taskmind.mcp import MCPRegistry, build_registry
from taskmind.services import TaskService, TaskAiService
from taskmind.storage import TaskStore, SQLiteTaskStore

logger = logging.getLogger(__name__)

# Global service instance
_service_instance: Optional['ServiceContainer'] = None


class ServiceContainer:
    """Container for all application services."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[TaskStore] = None,
        oracle: Optional[CompletionOracle] = None,
    ):
        self.settings = settings or get_settings()

        if store is None:
            db_dir = os.path.dirname(self.settings.db_path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
            store = SQLiteTaskStore(self.settings.db_path)
        self.store = store

        if oracle is None:
            oracle = HTTPCompletionOracle.from_settings(self.settings)
        self.oracle = oracle
        self.oracle_enabled = getattr(oracle, "enabled", True)
        if not self.oracle_enabled:
            logger.warning("No completion oracle configured (LLM_API_URL/LLM_API_KEY); AI tools will use fallbacks")

        self.task_service = TaskService(self.store)
        self.ai_service = TaskAiService(self.oracle)
        self.registry: MCPRegistry = build_registry(self.task_service, self.ai_service)
        logger.info(
            f"Services initialized: {len(self.registry.tool_names)} tools, "
            f"{len(self.registry.prompt_names)} prompts"
        )


def get_services() -> ServiceContainer:
    """Get the global service container instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ServiceContainer()
    return _service_instance


def set_services(container: Optional[ServiceContainer]) -> None:
    """Replace the global service container (None forgets it)."""
    global _service_instance
    _service_instance = container


def get_task_service() -> TaskService:
    return get_services().task_service


def get_registry() -> MCPRegistry:
    return get_services().registry
