"""
Tests for the MCP prompts (markdown reports).
"""
import pytest


class TestSummarizeTasks:
    def test_empty(self, registry):
        assert registry.get_prompt("summarize_tasks", {}) == "No tasks available to summarize."

    def test_detailed_by_default(self, registry, task_service):
        task_service.create_task("Ship", priority="URGENT")
        task_service.create_task("Polish", priority="LOW")
        done = task_service.create_task("Old urgent", priority="HIGH")
        task_service.update_task(done.id, status="DONE")

        result = registry.get_prompt("summarize_tasks", {})
        assert result.startswith(
            "# Task Management Summary\n\n"
            "## Overview\n"
            "- Total Tasks: 3\n"
            "- TODO: 2\n"
            "- In Progress: 0\n"
            "- Completed: 1\n"
            "- Urgent Tasks: 1\n\n"
        )
        assert "## ⚠️ High Priority Tasks Requiring Attention\n\n- **Ship** [URGENT] - TODO\n\n" in result
        assert "Old urgent" not in result
        assert result.endswith("## 💡 Recommendations\n\n- Focus on urgent tasks first\n")

    def test_brief(self, registry, task_service):
        task_service.create_task("Ship", priority="URGENT")
        result = registry.get_prompt("summarize_tasks", {"detailed": "false"})
        assert result.endswith("- Urgent Tasks: 1\n\n")
        assert "Recommendations" not in result


class TestSuggestNextTask:
    def test_empty_store(self, registry):
        assert registry.get_prompt("suggest_next_task", {}) == (
            "🎉 Great job! No active tasks remaining. Time to create new goals or take a break!"
        )

    def test_repeated_calls_pick_the_same_task(self, registry, task_service):
        task_service.create_task("First high", priority="HIGH")
        task_service.create_task("Second high", priority="HIGH")
        task_service.create_task("Low", priority="LOW")

        first = registry.get_prompt("suggest_next_task", {})
        assert "**First high**" in first
        assert registry.get_prompt("suggest_next_task", {}) == first
        assert len(task_service.get_all_tasks()) == 3

    def test_no_active_tasks(self, registry, task_service):
        task = task_service.create_task("Finished")
        task_service.update_task(task.id, status="DONE")
        assert registry.get_prompt("suggest_next_task", {}).startswith("🎉 Great job! No active tasks remaining.")

    def test_urgent_in_progress(self, registry, task_service):
        task_service.create_task("Minor", priority="LOW")
        task = task_service.create_task("Hotfix", description="Patch auth", priority="URGENT",
                                         due_date="2024-01-02T12:00:00")
        task_service.update_task(task.id, status="IN_PROGRESS")

        result = registry.get_prompt("suggest_next_task", {})
        assert result == (
            "🎯 **Suggested Next Task**\n\n"
            "**Hotfix**\n\n"
            "- Priority: 🔴 URGENT\n"
            "- Status: IN_PROGRESS\n"
            "- Description: Patch auth\n"
            "- Due Date: 2024-01-02T12:00:00\n\n"
            "**Why this task?**\n"
            "- This is an URGENT task that requires immediate attention\n"
            "- Already in progress - finish what you started!\n"
        )

    def test_high_priority_reason(self, registry, task_service):
        task_service.create_task("Important", priority="HIGH")
        result = registry.get_prompt("suggest_next_task", {})
        assert "- Priority: 🟠 HIGH\n" in result
        assert "- High priority task that should be addressed soon\n" in result
        assert "Description" not in result


class TestAnalyzeProductivity:
    def test_empty(self, registry):
        assert registry.get_prompt("analyze_productivity", {}) == "No tasks available for productivity analysis."

    def test_report(self, registry, task_service):
        for title in ("a", "b", "c"):
            task = task_service.create_task(title, priority="HIGH")
            task_service.update_task(task.id, status="DONE")
        task_service.create_task("d", priority="LOW")

        result = registry.get_prompt("analyze_productivity", {})
        assert "- Total Tasks: 4\n- Completed: 3 (75.0%)\n- Cancelled: 0\n- Active: 1\n" in result
        assert "✅ **Excellent completion rate!**" in result
        assert "- Most common priority level: **HIGH**" in result
        assert result.endswith("## 💡 Insights\n\n")

    def test_insights(self, registry, task_service):
        task_service.create_task("a", priority="URGENT")
        task_service.create_task("b", priority="URGENT")
        cancelled = task_service.create_task("c")
        task_service.update_task(cancelled.id, status="CANCELLED")

        result = registry.get_prompt("analyze_productivity", {})
        assert "❌ **Low completion rate.**" in result
        assert "creating tasks faster than completing them" in result
        assert "High cancellation rate detected" in result
        assert "Too many urgent tasks" in result


class TestGroupRelatedTasks:
    def test_nothing_to_group(self, registry):
        assert registry.get_prompt("group_related_tasks", {}) == "No tasks found to group."

    def test_no_tagged_tasks(self, registry, task_service):
        task_service.create_task("Untagged")
        assert registry.get_prompt("group_related_tasks", {}) == "# 🏷️ Tasks Grouped by Tags\n\nNo tasks with tags found.\n"

    def test_groups(self, registry, task_service):
        task_service.create_task("API docs", tags="docs, api")
        task_service.create_task("API tests", tags="api")
        task_service.create_task("No tags")
        result = registry.get_prompt("group_related_tasks", {})
        assert result == (
            "# 🏷️ Tasks Grouped by Tags\n\n"
            "## docs (1 tasks)\n\n"
            "- **API docs** [MEDIUM] - TODO\n\n"
            "## api (2 tasks)\n\n"
            "- **API docs** [MEDIUM] - TODO\n"
            "- **API tests** [MEDIUM] - TODO\n\n"
        )

    @pytest.mark.parametrize("keyword,expected", [("tests", "## api (1 tasks)"), ("", "## docs (1 tasks)")])
    def test_keyword_restricts_tasks(self, registry, task_service, keyword, expected):
        task_service.create_task("API docs", tags="docs, api")
        task_service.create_task("API tests", tags="api")
        assert expected in registry.get_prompt("group_related_tasks", {"keyword": keyword})

    def test_keyword_without_match(self, registry, task_service):
        task_service.create_task("API docs", tags="docs")
        assert registry.get_prompt("group_related_tasks", {"keyword": "zzz"}) == "No tasks found to group."
