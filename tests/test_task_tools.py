"""
Tests for the task management tools, called through the registry the way
an MCP client reaches them.
"""
import pytest

from taskmind.models import TaskPriority, TaskStatus


def create(registry, **arguments):
    return registry.call_tool("create_task", arguments)


class TestCreateTask:
    def test_success_message(self, registry):
        result = create(registry, title="Write report", priority="high")
        assert result == (
            "✅ Task created successfully!\n"
            "ID: 1\n"
            "Title: Write report\n"
            "Priority: HIGH\n"
            "Status: TODO"
        )

    def test_invalid_priority_falls_back_to_medium(self, registry, task_service):
        result = create(registry, title="Write report", priority="SUPER-URGENT")
        assert result.startswith("✅")
        assert task_service.get_task(1).priority == TaskPriority.MEDIUM

    def test_status_argument_ignored(self, registry, task_service):
        create(registry, title="Task", status="DONE")
        assert task_service.get_task(1).status == TaskStatus.TODO

    def test_bad_due_date_fails_whole_call(self, registry, task_service):
        result = create(registry, title="Task", dueDate="31/12/2024")
        assert result.startswith("❌ Error creating task:")
        assert task_service.get_all_tasks() == []

    def test_due_date_and_tags_stored(self, registry, task_service):
        create(registry, title="Task", dueDate="2024-12-31T23:59:00", tags="finance, q4")
        task = task_service.get_task(1)
        assert task.due_date.isoformat() == "2024-12-31T23:59:00"
        assert task.tags == "finance, q4"

    def test_missing_title(self, registry):
        assert registry.call_tool("create_task", {"description": "x"}).startswith("❌")

    def test_title_is_stripped(self, registry, task_service):
        result = create(registry, title="  Write report \n")
        assert "Title: Write report\n" in result
        assert task_service.get_task(1).title == "Write report"

    def test_blank_title(self, registry, task_service):
        assert create(registry, title="  ").startswith("❌ Error creating task:")
        assert task_service.get_all_tasks() == []


class TestListTasks:
    @pytest.fixture
    def seeded(self, task_service):
        task_service.create_task("Low todo", priority="LOW")
        task_service.create_task("Urgent todo", priority="URGENT")
        done = task_service.create_task("High done", priority="HIGH")
        task_service.update_task(done.id, status="DONE")
        return task_service

    def test_empty(self, registry):
        assert registry.call_tool("list_tasks", {}) == "📋 No tasks found."

    def test_all_unsorted(self, registry, seeded):
        result = registry.call_tool("list_tasks", {})
        assert result.startswith("📋 Found 3 task(s):\n\n📌 Task #1\n")
        assert result.index("Low todo") < result.index("Urgent todo") < result.index("High done")
        assert result.count("\n---\n") == 3

    def test_sorted_by_priority(self, registry, seeded):
        result = registry.call_tool("list_tasks", {"sortByPriority": True})
        assert result.index("Urgent todo") < result.index("High done") < result.index("Low todo")

    def test_status_filter_wins_over_everything(self, registry, seeded):
        result = registry.call_tool("list_tasks", {"status": "done", "priority": "LOW", "sortByPriority": "true"})
        assert result.startswith("📋 Found 1 task(s):")
        assert "High done" in result

    def test_priority_filter_wins_over_sort(self, registry, seeded):
        result = registry.call_tool("list_tasks", {"priority": "urgent", "sortByPriority": True})
        assert result.startswith("📋 Found 1 task(s):")
        assert "Urgent todo" in result

    def test_created_task_listed_once_under_its_priority(self, registry, task_service):
        create(registry, title="X", priority="HIGH")
        create(registry, title="Y", priority="LOW")
        result = registry.call_tool("list_tasks", {"priority": "HIGH"})
        assert result.startswith("📋 Found 1 task(s):")
        assert result.count("Title: X\n") == 1
        assert "Title: Y\n" not in result

    @pytest.mark.parametrize("arguments", [{"priority": "HIGH2"}, {"status": "DONE1"}])
    def test_filter_with_trailing_digit_is_error(self, registry, seeded, arguments):
        assert registry.call_tool("list_tasks", arguments).startswith("❌ Error listing tasks:")

    def test_invalid_status_filter_is_error(self, registry, seeded):
        assert registry.call_tool("list_tasks", {"status": "WAITING"}).startswith("❌ Error listing tasks:")

    def test_block_format(self, registry, task_service):
        task_service.create_task("Only", description=None, tags=None)
        result = registry.call_tool("list_tasks", {})
        assert (
            "📌 Task #1\n"
            "Title: Only\n"
            "Status: TODO\n"
            "Priority: MEDIUM\n"
            "Description: N/A\n"
            "Tags: N/A\n"
            "Due: N/A\n"
            "Created: 2024-01-01T09:00:00\n"
            "---\n"
        ) in result


class TestUpdateTask:
    def test_partial_update(self, registry, task_service):
        task_service.create_task("Title", description="Keep me", priority="LOW")
        result = registry.call_tool("update_task", {"id": 1, "status": "IN_PROGRESS"})
        assert result.startswith("✅ Task #1 updated successfully!\n📌 Task #1\n")
        task = task_service.get_task(1)
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.description == "Keep me"
        assert task.priority == TaskPriority.LOW

    def test_id_as_string(self, registry, task_service):
        task_service.create_task("Title")
        assert registry.call_tool("update_task", {"id": "1", "title": "Renamed"}).startswith("✅")
        assert task_service.get_task(1).title == "Renamed"

    def test_not_found(self, registry):
        assert registry.call_tool("update_task", {"id": 99, "title": "x"}) == "❌ Task not found with ID: 99"

    def test_not_found_leaves_store_unchanged(self, registry, task_service):
        task_service.create_task("Keep", priority="LOW")
        before = task_service.get_all_tasks()
        result = registry.call_tool("update_task", {"id": 999, "title": "x", "status": "DONE"})
        assert result == "❌ Task not found with ID: 999"
        assert task_service.get_all_tasks() == before
        assert task_service.get_task(999) is None

    @pytest.mark.parametrize("arguments", [{"priority": "HIGH2"}, {"status": "DONE1"}])
    def test_value_with_trailing_digit_rejected(self, registry, task_service, arguments):
        task_service.create_task("Title", priority="LOW")
        result = registry.call_tool("update_task", {"id": 1, "title": "New", **arguments})
        assert result.startswith("❌ Error updating task:")
        task = task_service.get_task(1)
        assert task.title == "Title"
        assert task.priority == TaskPriority.LOW
        assert task.status == TaskStatus.TODO

    def test_invalid_priority_fails_and_persists_nothing(self, registry, task_service):
        task_service.create_task("Title")
        result = registry.call_tool("update_task", {"id": 1, "title": "New", "priority": "P0"})
        assert result.startswith("❌ Error updating task:")
        assert task_service.get_task(1).title == "Title"


class TestDeleteTask:
    def test_delete(self, registry, task_service):
        task_service.create_task("Title")
        assert registry.call_tool("delete_task", {"id": 1}) == "✅ Task #1 deleted successfully!"
        assert task_service.get_task(1) is None

    def test_delete_missing(self, registry):
        assert registry.call_tool("delete_task", {"id": 5}) == "❌ Task not found with ID: 5"


class TestSearchTasks:
    def test_no_match(self, registry):
        assert registry.call_tool("search_tasks", {"keyword": "zzz"}) == "🔍 No tasks found matching 'zzz'"

    def test_match(self, registry, task_service):
        task_service.create_task("Fix Login page")
        task_service.create_task("Other", tags="login")
        task_service.create_task("Unrelated")
        result = registry.call_tool("search_tasks", {"keyword": "LOGIN"})
        assert result.startswith("🔍 Found 2 task(s) matching 'LOGIN':\n\n")
        assert "Unrelated" not in result
