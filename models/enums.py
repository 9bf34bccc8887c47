from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """
    Access tier of a user.

    Core / Semi-core are global; Head / Volunteer are scoped to a team.
    Values are matched exactly (case-sensitive).
    """

    core = "Core"
    semi_core = "Semi-core"
    head = "Head"
    volunteer = "Volunteer"
    unassigned = "Unassigned"

    @classmethod
    def parse(cls, value) -> "Role":
        """Unknown or missing role strings load as Unassigned."""
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.unassigned


GLOBAL_ROLES = (Role.core, Role.semi_core)
TEAM_SCOPED_ROLES = (Role.head, Role.volunteer)


# -----------------------------------------------------
# ACCESS LEVEL
# -----------------------------------------------------
class AccessLevel(BaseStrEnum):
    """Effective access level reported to clients."""

    core = "core"
    semi_core = "semi-core"
    head = "head"
    volunteer = "volunteer"
    none = "none"


# -----------------------------------------------------
# TASK STATUS
# -----------------------------------------------------
class TaskStatus(BaseStrEnum):
    """Board column of a task."""

    pending = "Pending"
    in_progress = "In Progress"
    completed = "Completed"


# -----------------------------------------------------
# FILE TYPE
# -----------------------------------------------------
class FileType(BaseStrEnum):
    pdf = "PDF"
    image = "Image"
    doc = "Doc"
    other = "Other"


# -----------------------------------------------------
# SCOPE KIND
# -----------------------------------------------------
class ScopeKind(BaseStrEnum):
    """How far a read query may reach."""

    all = "all"
    team = "team"
    assignee = "assignee"
    no_team = "no_team"
