"""fitcoach: readiness scoring and AI-generated programs for personal trainers."""

__version__ = "0.1.0"
