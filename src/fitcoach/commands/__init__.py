"""CLI commands for fitcoach."""

from .clients import clients
from .generate import generate
from .init import init
from .nutrition import nutrition
from .programs import programs
from .readiness import readiness
from .serve import serve
from .sessions import sessions
from .swap import swap

__all__ = [
    "clients",
    "generate",
    "init",
    "nutrition",
    "programs",
    "readiness",
    "serve",
    "sessions",
    "swap",
]
