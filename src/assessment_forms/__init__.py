"""Assessment form service: branching questionnaire schemas for student progress tracking."""

__version__ = "0.1.0"
