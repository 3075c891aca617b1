"""Unit tests for resume line rendering."""

from datetime import date

import pytest

from resumeforge.contexts.templating import (
    SECTION_HEADERS,
    CareerProfile,
    CertificationItem,
    EducationItem,
    ExperienceItem,
    ProjectItem,
    SkillItem,
    format_date_short,
    render_cover_letter_lines,
    render_resume_lines,
    render_resume_text,
)
from resumeforge.contexts.templating.line_renderer import (
    group_skills,
    render_certification_lines,
    render_education_lines,
    render_experience_lines,
    render_header_lines,
    render_project_lines,
    render_skills_lines,
)


def _jane() -> CareerProfile:
    return CareerProfile(full_name="Jane Doe", city="Austin", state="TX", phone="512-555-0100")


def _render(profile, experiences=(), projects=(), education=(), skills=(), certifications=(), **kwargs):
    return render_resume_lines(profile, experiences, projects, education, skills, certifications, **kwargs)


@pytest.mark.unit
def test_format_date_short():
    assert format_date_short("2024-01-15") == "Jan 2024"
    assert format_date_short("2019-12-01T08:30:00") == "Dec 2019"
    assert format_date_short(date(2020, 6, 30)) == "Jun 2020"


@pytest.mark.unit
def test_format_date_short_absent_or_unparseable():
    assert format_date_short(None) == ""
    assert format_date_short("") == ""
    assert format_date_short("sometime soon") == ""


@pytest.mark.unit
def test_format_date_short_year_only():
    """A bare year from YAML, as text or int, reads as January of that year."""
    assert format_date_short("2024") == "Jan 2024"
    assert format_date_short(2024) == "Jan 2024"

    experience = ExperienceItem(
        job_title="Engineer", company_name="Acme", start_date=2019, end_date="2021"
    )
    assert render_experience_lines([experience])[2] == "Jan 2019 – Jan 2021"


@pytest.mark.unit
def test_header_contact_line_without_links():
    """Only city/state and phone appear when no links are set."""
    experience = ExperienceItem(
        job_title="Engineer",
        company_name="Acme",
        start_date="2020-01-01",
        is_current=True,
        description=[f"Bullet {i}" for i in range(1, 6)],
    )
    lines = _render(_jane(), experiences=[experience])

    assert lines[0] == "Jane Doe"
    assert lines[1] == "Austin, TX | 512-555-0100"
    assert lines[2] == ""
    assert lines[3:6] == ["EXPERIENCE", "Engineer · Acme (Location)", "Jan 2020 – Present"]
    assert lines[6:11] == [f"- Bullet {i}" for i in range(1, 6)]
    assert lines[11] == ""
    assert len(lines) == 12


@pytest.mark.unit
def test_header_contact_line_with_links():
    profile = CareerProfile(
        full_name="Jane Doe",
        state="TX",
        linkedin_url="linkedin.com/in/jane",
        github_url="github.com/jane",
        portfolio_url="jane.dev",
    )
    assert render_header_lines(profile) == [
        "Jane Doe",
        "TX | linkedin.com/in/jane | github.com/jane | jane.dev",
        "",
    ]


@pytest.mark.unit
def test_empty_sections_are_omitted():
    """A profile without summary or items renders only the header."""
    assert _render(CareerProfile(full_name="Jane Doe")) == ["Jane Doe", "", ""]


@pytest.mark.unit
def test_summary_override_wins():
    profile = _jane()
    profile.professional_summary = "Base summary"

    assert _render(profile)[3:6] == ["SUMMARY", "Base summary", ""]
    assert _render(profile, summary_override="Tailored summary")[3:6] == ["SUMMARY", "Tailored summary", ""]


@pytest.mark.unit
def test_section_order():
    """Blocks always appear in the fixed template order."""
    profile = _jane()
    profile.professional_summary = "Summary"
    lines = _render(
        profile,
        experiences=[ExperienceItem(job_title="Engineer", company_name="Acme")],
        projects=[ProjectItem(project_name="Tool")],
        education=[EducationItem(degree="BSc")],
        skills=[SkillItem(skill_name="Python")],
        certifications=[CertificationItem(certification_name="CKA")],
    )
    positions = [lines.index(header) for header in SECTION_HEADERS]
    assert positions == sorted(positions)


@pytest.mark.unit
def test_render_is_deterministic():
    experiences = [ExperienceItem(job_title="Engineer", company_name="Acme", description=["a", "b"])]
    assert _render(_jane(), experiences=experiences) == _render(_jane(), experiences=experiences)


@pytest.mark.unit
def test_experience_placeholders():
    """Missing location and dates render as placeholders."""
    lines = render_experience_lines([ExperienceItem(job_title="Engineer", company_name="Acme")])
    assert lines == ["EXPERIENCE", "Engineer · Acme (Location)", "Start – End", ""]


@pytest.mark.unit
def test_experience_end_date():
    exp = ExperienceItem(
        job_title="Analyst",
        company_name="Initech",
        location="Dallas, TX",
        start_date="2018-01-15",
        end_date="2021-02-28",
    )
    assert render_experience_lines([exp])[1:3] == ["Analyst · Initech (Dallas, TX)", "Jan 2018 – Feb 2021"]


@pytest.mark.unit
def test_skills_grouped_by_category():
    """Skills group by category in first-seen order; uncategorized go under "Skills"."""
    skills = [
        SkillItem(skill_name="Python", category="Languages"),
        SkillItem(skill_name="Docker"),
        SkillItem(skill_name="SQL", category="Languages"),
        SkillItem(skill_name="Python", category="Languages"),
    ]
    assert group_skills(skills) == {"Languages": ["Python", "SQL"], "Skills": ["Docker"]}
    assert render_skills_lines(skills) == ["SKILLS", "Languages: Python, SQL", "Skills: Docker", ""]


@pytest.mark.unit
def test_blank_skill_category_uses_default():
    skills = [SkillItem(skill_name="Py", category="  "), SkillItem(skill_name="Git", category="")]
    assert group_skills(skills) == {"Skills": ["Py", "Git"]}


@pytest.mark.unit
def test_education_lines():
    entry = EducationItem(
        degree="BSc",
        major="Computer Science",
        university="State University",
        location="Austin",
        graduation_date="2019-05-01",
        gpa="3.8",
        relevant_coursework=["Algorithms", "Databases"],
    )
    assert render_education_lines([entry]) == [
        "EDUCATION",
        "BSc, Computer Science",
        "State University – Austin",
        "Graduation: May 2019 | GPA: 3.8",
        "Relevant coursework: Algorithms, Databases",
        "",
    ]


@pytest.mark.unit
def test_education_without_degree_uses_university():
    entry = EducationItem(university="State University")
    assert render_education_lines([entry]) == ["EDUCATION", "State University", "State University", ""]


@pytest.mark.unit
def test_project_lines():
    project = ProjectItem(
        project_name="Pipeline Kit",
        description="Kafka helpers.",
        impact="Used by four teams",
        technologies="Python, Kafka",
    )
    assert render_project_lines([project]) == [
        "PROJECTS",
        "Pipeline Kit",
        "- Kafka helpers.",
        "- Impact: Used by four teams",
        "- Tech: Python, Kafka",
        "",
    ]


@pytest.mark.unit
def test_certification_lines():
    """Certifications share one trailing blank line."""
    certs = [
        CertificationItem(
            certification_name="AWS Data Engineer",
            issuing_organization="Amazon",
            issue_date="2023-06-01",
        ),
        CertificationItem(certification_name="CKA"),
    ]
    assert render_certification_lines(certs) == [
        "CERTIFICATIONS & ACHIEVEMENTS",
        "- AWS Data Engineer",
        "  Amazon | Jun 2023",
        "- CKA",
        "",
    ]


@pytest.mark.unit
def test_render_resume_text():
    assert render_resume_text(["Jane Doe", "", "SUMMARY"]) == "Jane Doe\n\nSUMMARY"


@pytest.mark.unit
def test_render_cover_letter_lines():
    text = "\n\nDear team,   \n\nI am writing...\nJane\n\n"
    assert render_cover_letter_lines(text) == ["Dear team,", "", "I am writing...", "Jane"]
    assert render_cover_letter_lines("") == []
