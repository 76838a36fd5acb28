import pytest

from gate_ai.services.templates import ANALYSIS_TEMPLATES, build_analysis_prompt, get_template, list_templates


def test_template_ids():
    assert [template.id for template in list_templates()] == [
        "basic-summary",
        "study-note",
        "analysis-report",
        "idea-note",
        "action-items",
        "qa-format",
    ]


def test_every_template_has_content_placeholder():
    for template in ANALYSIS_TEMPLATES:
        assert "{content}" in template.prompt


def test_render_fills_content():
    prompt = get_template("basic-summary").render("PAGE TEXT")
    assert "{content}" not in prompt
    assert prompt.endswith("## Original content\nPAGE TEXT")


def test_render_keeps_braces_in_content():
    prompt = get_template("study-note").render("code: {x: 1}")
    assert "code: {x: 1}" in prompt


def test_unknown_template():
    assert get_template("nope") is None
    with pytest.raises(ValueError, match="Unknown analysis template"):
        build_analysis_prompt("text", template_id="nope")


def test_template_with_custom_prompt():
    prompt = build_analysis_prompt("text", template_id="action-items", custom_prompt="  Only this week  ")
    assert prompt.endswith("\n\n## Additional instructions\nOnly this week")


def test_custom_prompt_only():
    assert build_analysis_prompt("text", custom_prompt="List the names") == "List the names\n\n## Original content\ntext"


def test_neither_template_nor_prompt():
    with pytest.raises(ValueError):
        build_analysis_prompt("text", custom_prompt="   ")
