"""Constants for capacity planning."""

from enum import Enum


class ModuleOrder(str, Enum):
    """Order in which active modules are walked by the assignment pass."""

    INSERTION = "insertion"
    LONGEST_FIRST = "longest_first"


# Rooms are assumed to be open 40 hours per week
ROOM_HOURS_PER_WEEK = 40

# Flat approximation used by the monthly projection
WEEKS_PER_MONTH = 4

# Number of calendar months projected by the monthly planning
PLANNING_MONTHS = 12

# Occupation rate (percent) above which a trainer/room is overloaded
OVERLOAD_THRESHOLD = 100

DAYS_PER_WEEK = 7

# Specialty keywords that qualify a trainer for a whole module type
PRACTICAL_KEYWORD = "pratique"
THEORETICAL_KEYWORD = "théorique"

MONTH_NAMES_FR = [
    "Janvier",
    "Février",
    "Mars",
    "Avril",
    "Mai",
    "Juin",
    "Juillet",
    "Août",
    "Septembre",
    "Octobre",
    "Novembre",
    "Décembre",
]

# Recommendation messages shown on the capacity page
MSG_TRAINERS_OVERLOADED = "{count} formateur(s) en surcharge - redistribuer les modules"
MSG_ROOMS_OVERBOOKED = "{count} salle(s) surbookée(s) - revoir la planification"
MSG_GROUPS_WITHOUT_MODULES = "{count} groupe(s) sans modules assignés"
MSG_GROUPS_WITHOUT_ROOM = "{count} groupe(s) sans salle assignée"
MSG_CAPACITY_OPTIMAL = "Capacité optimale - possibilité de lancer de nouveaux groupes"

MSG_ASSIGNMENTS_CREATED = "{count} affectations créées automatiquement"
MSG_GROUPS_RECALCULATED = "{count} groupes recalculés"

# Label used in week buckets for groups without a room
NO_ROOM_LABEL = "Aucune salle"
UNKNOWN_TRAINER_LABEL = "Formateur inconnu"

# Monthly conflict types
CONFLICT_TRAINER_OVERLOAD = "trainer_overload"
CONFLICT_ROOM_OVERLOAD = "room_overload"
