"""
Project domain model.
Projects are identified by a sequential code and toggle between active and archived.
"""

from enum import Enum


PROJECT_CODE_PREFIX = "PRJ-"
PROJECT_CODE_MIN_DIGITS = 3

# Sentinel bucket for time entries logged without a project
NO_PROJECT_ID = "no-project"
NO_PROJECT_LABEL = "Sans projet"


class ProjectStatus(str, Enum):
    """Project status. Both transitions are reversible."""
    ACTIVE = "active"
    ARCHIVED = "archived"
