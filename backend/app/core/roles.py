ROLE_ADMIN = "ADMIN"
ROLE_COACH = "COACH"
ROLE_PLAYER = "PLAYER"

ALL_ROLES = {ROLE_ADMIN, ROLE_COACH, ROLE_PLAYER}
STAFF_ROLES = {ROLE_ADMIN, ROLE_COACH}

ROLE_DESCRIPTIONS = {
    ROLE_ADMIN: "Club administrator",
    ROLE_COACH: "Coach",
    ROLE_PLAYER: "Player",
}
