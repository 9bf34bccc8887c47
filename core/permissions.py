from models.enums import Role


# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
ROLE_PERMISSIONS = {

    # =====================================================
    # CORE: full control, the only role that manages people
    # =====================================================
    Role.core: [
        # User & permission management
        "permissions:manage",
        "users:create",

        # Team management
        "teams:create",
        "teams:manage",
        "teams:read_all",
        "teams_page:access",

        # Tasks
        "tasks:create", "tasks:assign",
        "tasks:read_all",

        # Files
        "files:read_all",
        "files:upload_any",

        # Chat
        "chat:all_teams",

        # Meetings
        "meetings:create",
    ],

    # =====================================================
    # SEMI-CORE: sees every team, cannot manage people
    # =====================================================
    Role.semi_core: [
        "teams:read_all",
        "teams_page:access",

        "tasks:create", "tasks:assign",
        "tasks:read_all",

        "files:read_all",
        "files:upload_any",

        "chat:all_teams",

        "meetings:create",
    ],

    # =====================================================
    # HEAD: runs their own team
    # =====================================================
    Role.head: [
        "teams_page:access",
        "tasks:create", "tasks:assign",
    ],

    # =====================================================
    # VOLUNTEER: own team, own tasks, own uploads
    # =====================================================
    Role.volunteer: [],

    # =====================================================
    # FALLBACK
    # =====================================================
    Role.unassigned: [],
}
