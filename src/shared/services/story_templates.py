"""
Story Templates

Guided prompts each work story is authored from. Responses are stored under
the prompt key.

    project          → problem, approach, outcome, learnings
    role_highlight   → role, impact, challenges
    lessons_learned  → situation, lesson, application
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from src.shared.models.enums import TemplateType


@dataclass(frozen=True)
class TemplatePrompt:
    key: str
    label: str
    placeholder: str
    hint: Optional[str] = None


@dataclass(frozen=True)
class StoryTemplate:
    type: TemplateType
    name: str
    description: str
    prompts: Tuple[TemplatePrompt, ...]

    @property
    def prompt_keys(self) -> List[str]:
        return [prompt.key for prompt in self.prompts]


TEMPLATES: dict[TemplateType, StoryTemplate] = {
    TemplateType.PROJECT: StoryTemplate(
        type=TemplateType.PROJECT,
        name="Project Deep-Dive",
        description="Walk through a specific project from problem to outcome",
        prompts=(
            TemplatePrompt(
                key="problem",
                label="What problem were you solving?",
                placeholder="Describe the challenge or opportunity that led to this project...",
                hint="Set the context. What was broken, missing, or needed?",
            ),
            TemplatePrompt(
                key="approach",
                label="What was your approach?",
                placeholder="Explain how you tackled the problem...",
                hint="Focus on your decisions and reasoning, not just what you did.",
            ),
            TemplatePrompt(
                key="outcome",
                label="What was the outcome?",
                placeholder="Share the results and impact...",
                hint="Be specific. Numbers, feedback, or tangible changes are great.",
            ),
            TemplatePrompt(
                key="learnings",
                label="What did you learn?",
                placeholder="Reflect on what you took away from this experience...",
                hint="What would you do differently? What surprised you?",
            ),
        ),
    ),
    TemplateType.ROLE_HIGHLIGHT: StoryTemplate(
        type=TemplateType.ROLE_HIGHLIGHT,
        name="Role Highlight",
        description="Showcase your impact in a specific role or position",
        prompts=(
            TemplatePrompt(
                key="role",
                label="What was your role?",
                placeholder="Describe your position and responsibilities...",
                hint="Go beyond the job title. What did you actually own?",
            ),
            TemplatePrompt(
                key="impact",
                label="What impact did you have?",
                placeholder="Share the difference you made...",
                hint="Think about what changed because you were there.",
            ),
            TemplatePrompt(
                key="challenges",
                label="What challenges did you overcome?",
                placeholder="Describe obstacles you faced and how you handled them...",
                hint="This shows resilience and problem-solving ability.",
            ),
        ),
    ),
    TemplateType.LESSONS_LEARNED: StoryTemplate(
        type=TemplateType.LESSONS_LEARNED,
        name="Lessons Learned",
        description="Share a meaningful experience and what it taught you",
        prompts=(
            TemplatePrompt(
                key="situation",
                label="What happened?",
                placeholder="Describe the situation or experience...",
                hint="Set the scene. What were the circumstances?",
            ),
            TemplatePrompt(
                key="lesson",
                label="What did you learn?",
                placeholder="Share the insight or lesson you gained...",
                hint="Be honest. The best lessons often come from mistakes.",
            ),
            TemplatePrompt(
                key="application",
                label="How have you applied it?",
                placeholder="Explain how this lesson has shaped your approach...",
                hint="Show growth and self-awareness.",
            ),
        ),
    ),
}


def get_template(template_type: TemplateType) -> StoryTemplate:
    return TEMPLATES[TemplateType(template_type)]


def list_templates() -> List[StoryTemplate]:
    return list(TEMPLATES.values())
