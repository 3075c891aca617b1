"""
ResumeForge - job-tailored resumes and cover letters from stored career data

Stores a candidate's career data (profile, work history, projects, skills,
education, certifications) and produces a resume tailored to a job description.

Architecture:
- Intake Context: Job description analysis and keyword extraction
- Targeting Context: Relevance scoring, item selection, page fitting
- Templating Context: Career data model and resume line rendering
- Generation Context: Generative-text summaries, cover letters, bullet rewrites
- Storage Context: Owner-scoped record store for career data and history
- Rendering Context: Plaintext export of rendered documents
- Orchestration Context: Session lifecycle tying the contexts together
"""

__version__ = "0.1.0"
