"""
AI suggestion service - wraps the completion oracle behind fixed intents.

Each intent fills a prompt template with task fields and trims the reply.
Oracle failures never reach the caller: every method degrades to its own
fallback value so plain task management keeps working without a model.
"""
import logging
from typing import Optional

from taskmind.adapters.llm_client import CompletionOracle
from taskmind.monitoring import record_oracle_call

logger = logging.getLogger(__name__)

NEUTRAL_SENTIMENT = "NEUTRAL"
DEFAULT_PRIORITY = "MEDIUM"
SUMMARY_FALLBACK = "Unable to generate summary"
TAGS_FALLBACK = ""
RISKS_FALLBACK = "Unable to assess risks"

SENTIMENT_PROMPT = """Analyze the sentiment of the following task description and respond with ONLY one word:
POSITIVE, NEGATIVE, or NEUTRAL.

Task description: {description}

Sentiment:
"""

PRIORITY_PROMPT = """Based on the following task information, suggest an appropriate priority level.
Respond with ONLY one of these words: LOW, MEDIUM, HIGH, or URGENT.

Consider:
- Urgency keywords (urgent, asap, critical, immediately)
- Impact keywords (important, essential, critical, must)
- Time constraints mentioned

Task title: {title}
Task description: {description}

Suggested priority:
"""

SUMMARY_PROMPT = """Generate a concise one-sentence summary of this task, highlighting the key action and outcome.
Keep it under 100 characters.

Task title: {title}
Task description: {description}

Summary:
"""

TAGS_PROMPT = """Based on the task information, suggest 2-4 relevant tags (keywords) that categorize this task.
Respond with comma-separated tags only, no explanation.
Examples: backend, frontend, bug, feature, documentation, testing

Task title: {title}
Task description: {description}

Tags:
"""

RISKS_PROMPT = """Analyze this task for potential risks or blockers.
Respond with a brief risk assessment (2-3 sentences) or "No significant risks detected".

Task title: {title}
Description: {description}
Status: {status}
Days open: {days_open}

Risk assessment:
"""


class TaskAiService:
    """AI-backed suggestions for tasks."""

    def __init__(self, oracle: CompletionOracle):
        self.oracle = oracle

    def _ask(self, intent: str, template: str, fallback: str, **fields) -> str:
        """Fill ``template``, call the oracle and return the trimmed reply, or ``fallback`` on any failure."""
        prompt = template.format(**fields)
        try:
            response = self.oracle.complete(prompt)
            result = response.strip()
        except Exception:
            logger.error(f"Error calling completion oracle for {intent}", exc_info=True)
            record_oracle_call(intent, "fallback")
            return fallback
        logger.info(f"{intent} result: {result}")
        record_oracle_call(intent, "success")
        return result

    def analyze_sentiment(self, description: Optional[str]) -> str:
        """
        Classify a description as POSITIVE, NEGATIVE or NEUTRAL.

        An empty or missing description returns NEUTRAL without calling the
        oracle. The reply is upper-cased but not checked against the three
        values; callers must tolerate anything.
        """
        if not description:
            record_oracle_call("sentiment", "skipped")
            return NEUTRAL_SENTIMENT
        return self._ask("sentiment", SENTIMENT_PROMPT, NEUTRAL_SENTIMENT, description=description).upper()

    def suggest_priority(self, title: Optional[str], description: Optional[str]) -> str:
        """Suggest LOW/MEDIUM/HIGH/URGENT. The reply is upper-cased, not validated."""
        return self._ask(
            "priority",
            PRIORITY_PROMPT,
            DEFAULT_PRIORITY,
            title=title or "",
            description=description or "",
        ).upper()

    def generate_task_summary(self, title: Optional[str], description: Optional[str]) -> str:
        return self._ask(
            "summary",
            SUMMARY_PROMPT,
            SUMMARY_FALLBACK,
            title=title or "",
            description=description or "",
        )

    def suggest_tags(self, title: Optional[str], description: Optional[str]) -> str:
        """Comma-separated tag suggestions; empty string when the oracle fails."""
        return self._ask(
            "tags",
            TAGS_PROMPT,
            TAGS_FALLBACK,
            title=title or "",
            description=description or "",
        )

    def detect_task_risks(
        self,
        title: Optional[str],
        description: Optional[str],
        status: str,
        days_open: int,
    ) -> str:
        return self._ask(
            "risks",
            RISKS_PROMPT,
            RISKS_FALLBACK,
            title=title or "",
            description=description or "",
            status=status,
            days_open=str(days_open),
        )
