"""
Prompt templates for the generative-text collaborator.

Templates live in generation/templates/{name}.txt.jinja and use custom
delimiters so the JSON examples inside them need no escaping:
- Variable: <<< var >>>
- Block: <% block %>
- Comment: <# comment #>
"""

import json
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from resumeforge.contexts.intake.job_target import JobTarget
from resumeforge.contexts.templating.career_data_structure import (
    CareerProfile,
    ExperienceItem,
    ProjectItem,
)
from resumeforge.contexts.templating.line_renderer import render_header_lines

TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"


class PromptRegistry:
    """Registry for loading and caching Jinja2 prompt templates."""

    def __init__(self, templates_path: Path = None):
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%",
            block_end_string="%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a prompt template by name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        template_path = f"{name}.txt.jinja"
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Prompt template '{name}' not found at {self.templates_path / template_path}"
            ) from e

        self._cache[name] = template
        return template

    def render(self, name: str, **context) -> str:
        return self.get_template(name).render(**context).strip()

    def is_cached(self, name: str) -> bool:
        return name in self._cache


_default_registry = None


def _registry() -> PromptRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = PromptRegistry()
    return _default_registry


def experience_context(experiences: Sequence[ExperienceItem]) -> List[dict]:
    """Selected experiences as the JSON listing sent to the model."""
    return [
        {
            "id": exp.id,
            "index": idx,
            "job_title": exp.job_title,
            "company_name": exp.company_name,
            "location": exp.location,
            "start_date": exp.start_date,
            "end_date": "Present" if exp.is_current else exp.end_date,
            "original_bullets": list(exp.description),
        }
        for idx, exp in enumerate(experiences)
    ]


def project_context(projects: Sequence[ProjectItem]) -> List[dict]:
    """Selected projects as the JSON listing sent to the model."""
    return [
        {
            "id": project.id,
            "index": idx,
            "project_name": project.project_name,
            "original_description": project.description or "",
            "original_impact": project.impact or "",
            "original_technologies": list(project.technologies),
        }
        for idx, project in enumerate(projects)
    ]


def build_tailoring_prompt(
    profile: CareerProfile,
    experiences: Sequence[ExperienceItem],
    projects: Sequence[ProjectItem],
    job: JobTarget,
    registry: PromptRegistry = None,
) -> Tuple[str, str]:
    """
    Build the system and user prompts for one tailoring request.

    Args:
        profile: Candidate profile (tone, writing sample, contact header)
        experiences: Selected experiences, in selection order
        projects: Selected projects, in selection order
        job: Target job with extracted keywords
        registry: Optional prompt registry (defaults to the packaged templates)

    Returns:
        (system_prompt, user_prompt)
    """
    registry = registry or _registry()
    name_line, contact_line, _ = render_header_lines(profile)
    header_block = "\n".join(line for line in (name_line, contact_line) if line)

    system_prompt = registry.render(
        "system",
        tone=profile.preferred_tone.value,
        writing_sample=profile.writing_sample or "",
    )
    user_prompt = registry.render(
        "tailoring",
        job=job,
        profile=profile,
        header_block=header_block or "(no contact details)",
        experiences_json=json.dumps(experience_context(experiences), indent=2),
        projects_json=json.dumps(project_context(projects), indent=2),
    )
    return system_prompt, user_prompt
