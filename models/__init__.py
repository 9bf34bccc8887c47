# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    Role,
    AccessLevel,
    TaskStatus,
    FileType,
    ScopeKind,
    GLOBAL_ROLES,
    TEAM_SCOPED_ROLES,
)

# -------------------------
# User Models
# -------------------------
from .user import (
    UserProfile,
    UserRead,
    UserCreate,
    UserRoleUpdate,
    UserTeamUpdate,
    ProfileUpdate,
)

# -------------------------
# Team Models
# -------------------------
from .team import (
    TeamBase,
    TeamCreate,
    TeamUpdate,
    TeamMemberAdd,
    TeamIconUpdate,
)

# -------------------------
# Task Models
# -------------------------
from .task import (
    TaskAssignee,
    TaskBase,
    TaskCreate,
    TaskUpdate,
    TaskStatusUpdate,
    TaskAssign,
)

# -------------------------
# File / Meeting / Chat Models
# -------------------------
from .file import FileCreate, FileRename, FileRead
from .meeting import MeetingCreate
from .message import ChatMessageCreate
