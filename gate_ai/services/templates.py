"""
Analysis templates for single-document analysis.

Each template prompt has a ``{content}`` placeholder that receives the
document text.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class AnalysisTemplate:
    id: str
    name: str
    description: str
    prompt: str

    def render(self, content: str) -> str:
        return self.prompt.replace("{content}", content)


ANALYSIS_TEMPLATES: List[AnalysisTemplate] = [
    AnalysisTemplate(
        id="basic-summary",
        name="Basic summary",
        description="Summarize the page concisely.",
        prompt="""Summarize the following web page content:

## Requirements
- Organize the key content into 3-5 main points
- Highlight important information and conclusions
- Briefly explain any technical terms

## Original content
{content}""",
    ),
    AnalysisTemplate(
        id="study-note",
        name="Study note",
        description="Organize the content for learning.",
        prompt="""Organize the following content as a study note:

## Format
1. **Key concepts**: main concepts and definitions
2. **Important points**: what must be remembered
3. **Examples**: concrete examples that aid understanding
4. **Q&A**: frequently asked questions with answers
5. **Review keywords**: keywords for later review

## Original content
{content}""",
    ),
    AnalysisTemplate(
        id="analysis-report",
        name="Analysis report",
        description="Produce an in-depth analysis report.",
        prompt="""Write an analysis report on the following content:

## Report structure
1. **Overview**: core topic and purpose of the document
2. **Key findings**: important information and data
3. **Analysis**: in-depth analysis of the content
4. **Implications**: insights that can be drawn
5. **Conclusion and recommendations**: final conclusion and how to apply it

## Original content
{content}""",
    ),
    AnalysisTemplate(
        id="idea-note",
        name="Idea note",
        description="Discover and expand ideas.",
        prompt="""Discover and expand on the ideas in the following content:

## Idea outline
1. **Core idea**: the central idea of the document
2. **Related ideas**: additional connected ideas
3. **Applications**: practical ways to apply them
4. **Growth potential**: directions for further development
5. **Connections**: links to other fields

## Original content
{content}""",
    ),
    AnalysisTemplate(
        id="action-items",
        name="Action items",
        description="Extract an actionable task list.",
        prompt="""Extract actionable items from the following content:

## Action item format
- [ ] Tasks that can be done immediately
- [ ] Short-term goals (within a week)
- [ ] Mid-term goals (within a month)
- [ ] Long-term goals

Add a priority and an estimated duration to each item.

## Original content
{content}""",
    ),
    AnalysisTemplate(
        id="qa-format",
        name="Q&A format",
        description="Restructure the content as questions and answers.",
        prompt="""Restructure the following content in Q&A format:

## Q&A format
Q1: [key question]
A1: [detailed answer]

Q2: ...

Create at least 5 Q&A pairs with questions that capture the core of the content.

## Original content
{content}""",
    ),
]

_TEMPLATES_BY_ID = {template.id: template for template in ANALYSIS_TEMPLATES}


def list_templates() -> List[AnalysisTemplate]:
    return list(ANALYSIS_TEMPLATES)


def get_template(template_id: str) -> Optional[AnalysisTemplate]:
    return _TEMPLATES_BY_ID.get(template_id)


def build_analysis_prompt(
    content: str,
    template_id: Optional[str] = None,
    custom_prompt: Optional[str] = None,
) -> str:
    """
    Build the user prompt for a single-document analysis.

    The template prompt is filled with ``content``; a custom prompt is
    appended as additional instructions. With only a custom prompt the
    content is appended after it.

    Raises:
        ValueError: If the template is unknown, or neither a template nor a
            custom prompt is given
    """
    custom_prompt = (custom_prompt or "").strip()

    if template_id:
        template = get_template(template_id)
        if template is None:
            raise ValueError(f"Unknown analysis template: {template_id}")
        prompt = template.render(content)
        if custom_prompt:
            prompt += f"\n\n## Additional instructions\n{custom_prompt}"
        return prompt

    if custom_prompt:
        return f"{custom_prompt}\n\n## Original content\n{content}"

    raise ValueError("Select a template or enter a custom prompt")
