"""Prompt assembly for the AI endpoints.

Pure functions: no I/O. The system block is always prepended unchanged. Only
the conversation history is trimmed; everything else is passed through.
"""

from collections.abc import Sequence

from nexus_ai.models.conversation import ConversationTurn
from nexus_ai.models.project import ProjectSnapshot

CONVERSATION_WINDOW = 5

NEXUS_SYSTEM_PROMPT = """You are Nexus AI, an intelligent project management assistant built to help users plan and execute their projects successfully.

PERSONALITY:
- Friendly, encouraging, and professional
- Give actionable, specific advice (not generic tips)
- Be concise but thorough
- Focus on practical solutions

YOUR ROLE:
- Analyze project details and provide smart, personalized hints
- Suggest tech stacks and tools based on project type
- Create roadmaps and timelines
- Help with problem-solving and decision-making
- Offer team management and productivity tips

IMPORTANT RULES:
- NEVER name the underlying model or the company that built it - you are NEXUS AI
- Give SPECIFIC advice with examples, not generic tips
- Keep responses under 300 words unless asked for more detail
- Use markdown formatting (##, **, bullet points)
- Be encouraging but honest about challenges

When analyzing projects, consider: project type, progress, team size, timeline, and user's specific goals."""

ROLE_LABELS = {"user": "User", "assistant": "Nexus AI"}

CONNECTIVITY_PROMPT = 'Say "Nexus AI is online!" in a friendly way.'

HINTS_TASK = """TASK: As Nexus AI, analyze this project and provide:
1. **Smart Insights** - 5-7 specific, actionable hints for THIS project (not generic advice)
2. **Recommended Tech Stack** - Suggest specific tools/frameworks if relevant
3. **Next Steps** - Based on {progress}% progress, what should they do NOW?
4. **Potential Challenges** - What to watch out for

Be specific to THIS project. Use markdown formatting. Be encouraging but practical."""

CHAT_TASK = """RESPOND AS NEXUS AI: Be helpful, specific, and actionable. If discussing the project, reference the context above. Keep it conversational and under 200 words unless more detail is requested. Use markdown formatting."""

ROADMAP_TASK = """TASK: As Nexus AI, create a detailed project roadmap with 5 phases. For each phase include:
- Phase name
- Key tasks (3-5 specific tasks)
- Estimated duration
- Success criteria

Format using markdown. Be specific to this project type."""


def render_history(
    history: Sequence[ConversationTurn] | None,
    window: int = CONVERSATION_WINDOW,
) -> str:
    """Render the most recent turns, oldest first, one per line."""
    if not history:
        return ""
    recent = list(history)[-window:]
    return "\n".join(f"{ROLE_LABELS[turn.role]}: {turn.content}" for turn in recent)


def render_project(project: ProjectSnapshot, heading: str = "PROJECT CONTEXT") -> str:
    """Render the fixed set of project fields as a labeled block."""
    return "\n".join([
        f"{heading}:",
        f"- Name: {project.name}",
        f"- Description: {project.description or 'No description provided'}",
        f"- Progress: {project.progress}%",
        f"- Team Size: {project.team_size} members",
        f"- Deadline: {project.due_date}",
        f"- Status: {project.status}",
    ])


def build_prompt(
    task: str,
    project: ProjectSnapshot | None = None,
    history: Sequence[ConversationTurn] | None = None,
    message: str | None = None,
    project_heading: str = "PROJECT CONTEXT",
) -> str:
    """Assemble system block, history, project, message and task suffix."""
    sections = [NEXUS_SYSTEM_PROMPT]
    rendered_history = render_history(history)
    if rendered_history:
        sections.append(f"CONVERSATION HISTORY:\n{rendered_history}")
    if project is not None:
        sections.append(render_project(project, heading=project_heading))
    if message is not None:
        sections.append(f"USER MESSAGE: {message}")
    sections.append(task)
    return "\n\n".join(sections)


def build_hints_prompt(project: ProjectSnapshot) -> str:
    return build_prompt(
        HINTS_TASK.format(progress=project.progress),
        project=project,
        project_heading="USER'S PROJECT",
    )


def build_chat_prompt(
    message: str,
    project: ProjectSnapshot | None = None,
    history: Sequence[ConversationTurn] | None = None,
) -> str:
    return build_prompt(
        CHAT_TASK,
        project=project,
        history=history,
        message=message,
        project_heading="CURRENT PROJECT CONTEXT",
    )


def build_roadmap_prompt(project: ProjectSnapshot) -> str:
    return build_prompt(ROADMAP_TASK, project=project, project_heading="PROJECT")
