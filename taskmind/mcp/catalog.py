"""
The fixed MCP catalogue: every tool, prompt and resource the server exposes.

Handlers are bound to their services here, so the registry only ever sees
callables that take the declared parameters.
"""
from functools import partial

from taskmind.mcp import resources
from taskmind.mcp.handlers import ai_handlers, prompt_handlers, task_handlers
from taskmind.mcp.registry import MCPRegistry, ParamSpec, PromptSpec, ResourceSpec, ToolSpec
from taskmind.services import TaskService, TaskAiService

PRIORITY_CHOICES = "LOW, MEDIUM, HIGH, or URGENT"
STATUS_CHOICES = "TODO, IN_PROGRESS, DONE, or CANCELLED"


def _task_id(description: str = "ID of the task") -> ParamSpec:
    return ParamSpec("taskId", "integer", description, required=True)


def build_registry(task_service: TaskService, ai_service: TaskAiService) -> MCPRegistry:
    """Build and validate the full catalogue. Raises RegistryError on a malformed entry."""
    registry = MCPRegistry()

    # Task management tools
    registry.add_tool(ToolSpec(
        name="create_task",
        description="Create a new task with title, description, priority, and optional due date",
        handler=partial(task_handlers.handle_create_task, task_service),
        params=(
            ParamSpec("title", "string", "Title of the task", required=True),
            ParamSpec("description", "string", "Detailed description of the task"),
            ParamSpec("priority", "string", f"Priority: {PRIORITY_CHOICES}", default="MEDIUM"),
            ParamSpec("dueDate", "string", "Due date in ISO format (yyyy-MM-dd'T'HH:mm:ss)"),
            ParamSpec("tags", "string", "Comma-separated tags"),
        ),
    ))
    registry.add_tool(ToolSpec(
        name="list_tasks",
        description="List all tasks or filter by status/priority",
        handler=partial(task_handlers.handle_list_tasks, task_service),
        params=(
            ParamSpec("status", "string", f"Filter by status: {STATUS_CHOICES}"),
            ParamSpec("priority", "string", f"Filter by priority: {PRIORITY_CHOICES}"),
            ParamSpec("sortByPriority", "boolean", "Sort by priority", default=False),
        ),
    ))
    registry.add_tool(ToolSpec(
        name="update_task",
        description="Update an existing task by ID",
        handler=partial(task_handlers.handle_update_task, task_service),
        params=(
            ParamSpec("id", "integer", "ID of the task to update", required=True),
            ParamSpec("title", "string", "New title"),
            ParamSpec("description", "string", "New description"),
            ParamSpec("status", "string", f"New status: {STATUS_CHOICES}"),
            ParamSpec("priority", "string", f"New priority: {PRIORITY_CHOICES}"),
            ParamSpec("dueDate", "string", "New due date in ISO format"),
            ParamSpec("tags", "string", "New tags"),
        ),
    ))
    registry.add_tool(ToolSpec(
        name="delete_task",
        description="Delete a task by ID",
        handler=partial(task_handlers.handle_delete_task, task_service),
        params=(ParamSpec("id", "integer", "ID of the task to delete", required=True),),
    ))
    registry.add_tool(ToolSpec(
        name="search_tasks",
        description="Search tasks by keyword in title, description, or tags",
        handler=partial(task_handlers.handle_search_tasks, task_service),
        params=(ParamSpec("keyword", "string", "Keyword to search for", required=True),),
    ))

    # AI tools
    registry.add_tool(ToolSpec(
        name="smart_create_task",
        description="Create a task with AI-powered auto-suggestions for priority, tags, and summary",
        handler=partial(ai_handlers.handle_smart_create_task, task_service, ai_service),
        params=(
            ParamSpec("title", "string", "Title of the task", required=True),
            ParamSpec("description", "string", "Detailed description of the task", required=True),
        ),
    ))
    registry.add_tool(ToolSpec(
        name="analyze_task_sentiment",
        description="Analyze the sentiment of a task's description using AI",
        handler=partial(ai_handlers.handle_analyze_task_sentiment, task_service, ai_service),
        params=(_task_id("ID of the task to analyze"),),
    ))
    registry.add_tool(ToolSpec(
        name="suggest_task_priority",
        description="Use AI to suggest an appropriate priority level for a task",
        handler=partial(ai_handlers.handle_suggest_task_priority, task_service, ai_service),
        params=(_task_id(),),
    ))
    registry.add_tool(ToolSpec(
        name="generate_task_summary",
        description="Generate an AI-powered concise summary of a task",
        handler=partial(ai_handlers.handle_generate_task_summary, task_service, ai_service),
        params=(_task_id(),),
    ))
    registry.add_tool(ToolSpec(
        name="suggest_task_tags",
        description="Use AI to suggest relevant tags for better task organization",
        handler=partial(ai_handlers.handle_suggest_task_tags, task_service, ai_service),
        params=(_task_id(),),
    ))
    registry.add_tool(ToolSpec(
        name="detect_task_risks",
        description="Use AI to detect potential risks or blockers in a task",
        handler=partial(ai_handlers.handle_detect_task_risks, task_service, ai_service),
        params=(_task_id(),),
    ))

    # Prompts
    registry.add_prompt(PromptSpec(
        name="summarize_tasks",
        description="Generate a comprehensive summary of all tasks with insights and recommendations",
        handler=partial(prompt_handlers.handle_summarize_tasks, task_service),
        params=(ParamSpec("detailed", "boolean", "Include detailed analysis", default=True),),
    ))
    registry.add_prompt(PromptSpec(
        name="suggest_next_task",
        description="AI-powered suggestion for the next task to work on based on priority and status",
        handler=partial(prompt_handlers.handle_suggest_next_task, task_service),
    ))
    registry.add_prompt(PromptSpec(
        name="analyze_productivity",
        description="Analyze task completion patterns and provide productivity insights",
        handler=partial(prompt_handlers.handle_analyze_productivity, task_service),
    ))
    registry.add_prompt(PromptSpec(
        name="group_related_tasks",
        description="Group tasks by common themes, tags, or keywords for better organization",
        handler=partial(prompt_handlers.handle_group_related_tasks, task_service),
        params=(ParamSpec("keyword", "string", "Keyword to group by (optional)"),),
    ))

    # Resources
    registry.add_resource(ResourceSpec(
        uri="task://all",
        name="All Tasks",
        description="Returns all tasks in the system",
        handler=partial(resources.read_all_tasks, task_service),
    ))
    registry.add_resource(ResourceSpec(
        uri="task://summary",
        name="Tasks Summary",
        description="Returns a summary of all tasks grouped by status",
        handler=partial(resources.read_summary, task_service),
        mime_type="text/plain",
    ))
    registry.add_resource(ResourceSpec(
        uri="task://status/{status}",
        name="Tasks by Status",
        description=f"Returns all tasks filtered by status ({STATUS_CHOICES.replace(', or', ',')})",
        handler=partial(resources.read_tasks_by_status, task_service),
    ))
    registry.add_resource(ResourceSpec(
        uri="task://priority/{priority}",
        name="Tasks by Priority",
        description=f"Returns all tasks filtered by priority ({PRIORITY_CHOICES.replace(', or', ',')})",
        handler=partial(resources.read_tasks_by_priority, task_service),
    ))
    registry.add_resource(ResourceSpec(
        uri="task://{id}",
        name="Task by ID",
        description="Returns a specific task by its ID",
        handler=partial(resources.read_task, task_service),
    ))

    return registry
