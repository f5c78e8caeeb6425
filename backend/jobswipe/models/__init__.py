from jobswipe.models.user import User
from jobswipe.models.profile import Profile, Resume
from jobswipe.models.job import Job, WORK_MODES
from jobswipe.models.swipe import Swipe, Application, DECISIONS, APPLICATION_STATUSES

__all__ = [
    "User",
    "Profile",
    "Resume",
    "Job",
    "Swipe",
    "Application",
    "WORK_MODES",
    "DECISIONS",
    "APPLICATION_STATUSES",
]
